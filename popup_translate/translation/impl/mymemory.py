"""
MyMemory 翻訳実装

MyMemory の無料翻訳メモリ API を使用。API キー不要。
言語検出を持たないため、ソース言語 "auto" は英語として扱う。
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import BaseTranslator
from ..classifier import ErrorClassifier, status_from
from ..lang_codes import AUTO, ENGLISH
from ..result import TranslationResult

DEFAULT_ENDPOINT = "https://api.mymemory.translated.net/get"


class MyMemoryTranslator(BaseTranslator):
    """
    MyMemory (community translation memory)

    HTTP ステータスが 200 でも本文の responseStatus がエラーを示す場合がある。
    """

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, **kwargs):
        super().__init__(**kwargs)
        self.endpoint = endpoint

    @classmethod
    def from_config(cls, config: Dict[str, Any], **deps) -> MyMemoryTranslator:
        endpoint = config.get("endpoints", {}).get("mymemory") or DEFAULT_ENDPOINT
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

        Raises:
            InvalidTranslationRequest: 引数が不正な場合
            TranslationError: HTTP エラー、responseStatus のエラー、通信失敗
        """
        self.validate_params(text, source_lang, target_lang)

        actual_source = ENGLISH if source_lang == AUTO else source_lang
        data = await self._request_json(
            "GET",
            self.endpoint,
            params={"q": text, "langpair": f"{actual_source}|{target_lang}"},
        )

        if not isinstance(data, dict):
            raise self._error(
                "Unexpected response format from MyMemory", ErrorClassifier.unknown()
            )

        status = status_from(data.get("responseStatus"))
        if status is None:
            raise self._error(
                "MyMemory response has no responseStatus", ErrorClassifier.unknown()
            )
        if status != 200:
            message = self._extract_error_message(data) or f"MyMemory error {status}"
            raise self._error(
                message, ErrorClassifier.classify_status(status, message), status=status
            )

        response_data = data.get("responseData") or {}
        translation = response_data.get("translatedText") if isinstance(response_data, dict) else None
        if not isinstance(translation, str):
            raise self._error(
                "MyMemory response has no translated text", ErrorClassifier.unknown()
            )

        result = TranslationResult(
            translation=translation,
            src_phonetic="",
            target_phonetic="",
            detected_lang=actual_source if source_lang == AUTO else None,
        )
        return await self.enrich_with_phonetics(result, text, actual_source, target_lang)

    def _extract_error_message(self, body: Any) -> str:
        if isinstance(body, dict) and body.get("responseDetails"):
            return str(body["responseDetails"])
        return super()._extract_error_message(body)

    def get_translator_name(self) -> str:
        """翻訳サービス名を取得"""
        return "mymemory"
