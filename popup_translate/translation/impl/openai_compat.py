"""
OpenAI 互換翻訳実装

ローカルで動作する OpenAI 互換の chat/completions プロキシに翻訳プロンプトを送る。
リクエストはホスト側の ProxyFetcher 経由で行い、結果はエンベロープで受け取る。
プロキシによっては Gemini 形式（candidates）で応答するため両形式に対応する。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base import BaseTranslator
from ..classifier import ErrorClassifier
from ..lang_codes import get_language_name
from ..prompts import build_translation_prompt, extract_reply_text, parse_translation_reply
from ..result import TranslationResult
from ..transport import HttpxProxyFetcher, ProxyFetcher, ProxyResponse

DEFAULT_ENDPOINT = "http://127.0.0.1:8317/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
TEMPERATURE = 0.3


class OpenAICompatibleTranslator(BaseTranslator):
    """
    OpenAI 互換プロキシ (LLM)

    API キーは任意。設定されていれば Authorization: Bearer ヘッダで送る。

    Examples:
        >>> translator = OpenAICompatibleTranslator(endpoint="http://127.0.0.1:8317/v1/chat/completions")
        >>> result = await translator.translate("good morning", "en", "ja")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        endpoint: str = DEFAULT_ENDPOINT,
        model: str = DEFAULT_MODEL,
        proxy_fetcher: Optional[ProxyFetcher] = None,
        **kwargs,
    ):
        """
        OpenAICompatibleTranslator を初期化

        Args:
            api_key: API キー（ローカルプロキシでは不要な場合が多い）
            endpoint: chat/completions エンドポイント
            model: モデル名
            proxy_fetcher: 中継フェッチ（None なら HttpTransport で直接送信）
            **kwargs: BaseTranslator に渡すパラメータ
        """
        super().__init__(**kwargs)
        self.api_key = api_key or None
        self.endpoint = endpoint
        self.model = model
        self.proxy_fetcher = proxy_fetcher or HttpxProxyFetcher(self.transport)

    @classmethod
    def from_config(cls, config: Dict[str, Any], **deps) -> OpenAICompatibleTranslator:
        return cls(
            api_key=config.get("api_keys", {}).get("openai"),
            endpoint=config.get("endpoints", {}).get("openai") or DEFAULT_ENDPOINT,
            model=config.get("models", {}).get("openai") or DEFAULT_MODEL,
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
            TranslationError: エンベロープのエラー、応答内のプロバイダエラー、通信失敗
        """
        self.validate_params(text, source_lang, target_lang)

        prompt = build_translation_prompt(
            text, get_language_name(source_lang), get_language_name(target_lang)
        )
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        response = await self.proxy_fetcher.fetch(
            self.endpoint,
            method="POST",
            headers=headers,
            json={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": TEMPERATURE,
            },
        )
        data = self._unwrap(response)

        content = extract_reply_text(data)
        if content is None:
            raise self._error("Model reply contained no text", ErrorClassifier.unknown())

        result = parse_translation_reply(content)
        return await self.enrich_with_phonetics(result, text, source_lang, target_lang)

    def _unwrap(self, response: ProxyResponse) -> Any:
        """
        エンベロープから応答本文を取り出す

        Raises:
            TranslationError: エンベロープがエラー、または本文にエラーオブジェクトがある場合
        """
        if response.error:
            if response.status is None:
                raise self._error(
                    f"Network error: {response.message}" if response.message else "Network error",
                    ErrorClassifier.network(),
                )
            message = self._extract_error_message(response.data) or response.message or ""
            if response.data is None and response.status < 300:
                classification = ErrorClassifier.non_json()
            else:
                classification = ErrorClassifier.classify_status(
                    response.status,
                    self._error_markers(response.data) or message,
                    api_key_configured=self.api_key is not None,
                )
            raise self._error(message, classification, status=response.status)

        data = response.data
        # プロキシが上流のエラーを 2xx で包んで返す場合
        if isinstance(data, dict) and data.get("error"):
            message = self._extract_error_message(data)
            raise self._error(
                message or "Provider returned an error",
                ErrorClassifier.classify_provider_message(
                    self._error_markers(data) or message
                ),
                status=response.status,
            )
        return data

    def _error_markers(self, body: Any) -> str:
        """分類用に error.message / type / code を連結"""
        if not isinstance(body, dict) or not isinstance(body.get("error"), dict):
            return self._extract_error_message(body)
        error = body["error"]
        parts = [error.get("message"), error.get("type"), error.get("code")]
        return " ".join(str(part) for part in parts if part)

    def get_translator_name(self) -> str:
        """翻訳サービス名を取得"""
        return "openai"
