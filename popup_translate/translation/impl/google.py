"""
Google Translate 実装

非公式の Google Translate REST エンドポイント（client=gtx）を使用。
API キー不要でほぼ全言語ペアに対応し、フォールバック先としても使われる。
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base import BaseTranslator
from ..classifier import ErrorClassifier
from ..lang_codes import AUTO, normalize_for_google
from ..result import TranslationResult

DEFAULT_ENDPOINT = "https://translate.googleapis.com/translate_a/single"


class GoogleTranslator(BaseTranslator):
    """
    Google Translate (unofficial REST endpoint)

    レスポンスはネストした配列で、data[0] の各セグメントが
    [訳文, 原文, 訳文の発音, 原文の発音, ...] の形をとる。

    Examples:
        >>> translator = GoogleTranslator()
        >>> result = await translator.translate("hello", "auto", "vi")
        >>> print(result.translation)
        "xin chào"
    """

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, **kwargs):
        """
        GoogleTranslator を初期化

        Args:
            endpoint: API エンドポイント
            **kwargs: BaseTranslator に渡すパラメータ
        """
        super().__init__(**kwargs)
        self.endpoint = endpoint

    @classmethod
    def from_config(cls, config: Dict[str, Any], **deps) -> GoogleTranslator:
        endpoint = config.get("endpoints", {}).get("google") or DEFAULT_ENDPOINT
        return cls(endpoint=endpoint, **deps)

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        ui_language: str = "en",
    ) -> TranslationResult:
        """
        テキストを翻訳

        Args:
            text: 翻訳対象テキスト
            source_lang: ソース言語コード、または "auto"
            target_lang: ターゲット言語コード
            ui_language: 表示言語（このサービスでは未使用）

        Returns:
            TranslationResult

        Raises:
            InvalidTranslationRequest: 引数が不正な場合
            TranslationError: HTTP エラー（429 はレート制限）、通信失敗、想定外の応答
        """
        self.validate_params(text, source_lang, target_lang)

        data = await self._request_json(
            "GET",
            self.endpoint,
            params=self._build_params(text, source_lang, target_lang),
        )
        result = self._parse_response(data, source_lang)
        return await self.enrich_with_phonetics(result, text, source_lang, target_lang)

    def _build_params(
        self, text: str, source_lang: str, target_lang: str
    ) -> List[Tuple[str, str]]:
        # dt は複数指定するためタプルのリストで渡す（t: 訳文, rm: 発音表記）
        return [
            ("client", "gtx"),
            ("sl", normalize_for_google(source_lang)),
            ("tl", normalize_for_google(target_lang)),
            ("dt", "t"),
            ("dt", "rm"),
            ("q", text),
        ]

    def _parse_response(self, data: Any, source_lang: str) -> TranslationResult:
        """
        ネスト配列の応答をパース

        Raises:
            TranslationError: 応答が配列でない場合（unknown）
        """
        if not isinstance(data, list):
            raise self._error(
                "Unexpected response format from Google Translate",
                ErrorClassifier.unknown(),
            )

        detected_lang: Optional[str] = None
        if source_lang == AUTO and len(data) > 2 and isinstance(data[2], str):
            detected_lang = data[2]

        segments = data[0] if data and isinstance(data[0], list) else []
        translation = ""
        src_phonetic = ""
        target_phonetic = ""
        for segment in segments:
            if not isinstance(segment, list):
                continue
            if segment and isinstance(segment[0], str):
                translation += segment[0]
            # 発音表記は最初に見つかった文字列を採用
            if not target_phonetic and len(segment) > 2 and _is_text(segment[2]):
                target_phonetic = segment[2]
            if not src_phonetic and len(segment) > 3 and _is_text(segment[3]):
                src_phonetic = segment[3]

        return TranslationResult(
            translation=translation,
            src_phonetic=src_phonetic,
            target_phonetic=target_phonetic,
            detected_lang=detected_lang,
        )

    def get_translator_name(self) -> str:
        """翻訳サービス名を取得"""
        return "google"


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)
