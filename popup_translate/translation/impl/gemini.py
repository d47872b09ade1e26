"""
Gemini 翻訳実装

Google Gemini の generateContent API に翻訳プロンプトを送り、
JSON 形式の応答から訳文と発音表記を取り出す。API キー必須。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base import BaseTranslator
from ..classifier import ErrorClassification, ErrorClassifier, ErrorKind
from ..lang_codes import get_language_name
from ..prompts import build_translation_prompt, extract_reply_text, parse_translation_reply
from ..result import TranslationResult

DEFAULT_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
DEFAULT_MODEL = "gemini-2.0-flash-lite"


class GeminiTranslator(BaseTranslator):
    """
    Gemini (LLM)

    Examples:
        >>> translator = GeminiTranslator(api_key="AI...")
        >>> result = await translator.translate("ありがとう", "ja", "vi")
        >>> print(result.translation, result.src_phonetic)
        "Cảm ơn" "arigatou"
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: str = DEFAULT_ENDPOINT,
        model: str = DEFAULT_MODEL,
        **kwargs,
    ):
        """
        GeminiTranslator を初期化

        Args:
            api_key: Google AI Studio の API キー
            endpoint: エンドポイント（"{model}" はモデル名に置換）
            model: モデル名
            **kwargs: BaseTranslator に渡すパラメータ
        """
        super().__init__(**kwargs)
        self.api_key = api_key or None
        self.model = model
        self.endpoint = endpoint.replace("{model}", model)

    @classmethod
    def from_config(cls, config: Dict[str, Any], **deps) -> GeminiTranslator:
        return cls(
            api_key=config.get("api_keys", {}).get("gemini"),
            endpoint=config.get("endpoints", {}).get("gemini") or DEFAULT_ENDPOINT,
            model=config.get("models", {}).get("gemini") or DEFAULT_MODEL,
            **deps,
        )

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
            TranslationError: API キー未設定（通信前に検出）、HTTP エラー、通信失敗
        """
        self.validate_params(text, source_lang, target_lang)

        if not self.api_key:
            raise self._error(
                "Gemini API key is not configured",
                ErrorClassification.for_kind(ErrorKind.API_KEY_MISSING),
            )

        prompt = build_translation_prompt(
            text, get_language_name(source_lang), get_language_name(target_lang)
        )
        data = await self._request_json(
            "POST",
            self.endpoint,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self.api_key,
            },
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )

        content = extract_reply_text(data)
        if content is None:
            raise self._error("Model reply contained no text", ErrorClassifier.unknown())

        result = parse_translation_reply(content)
        return await self.enrich_with_phonetics(result, text, source_lang, target_lang)

    def get_translator_name(self) -> str:
        """翻訳サービス名を取得"""
        return "gemini"
