"""
翻訳コントローラ

ホストからの翻訳リクエストを受け、サービスの選択・エラー分類・
既定サービス（Google）への1回限りのフォールバックを行う。

Usage:
    async with TranslationController({"api_keys": {"gemini": "AI..."}}) as controller:
        result = await controller.translate(
            TranslationRequest("ありがとう", "ja", "vi", service_id="gemini")
        )
        print(result.translation, result.fallback_notice)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import get_default_config, merge_config
from .i18n import I18nManager
from .locales import build_default_i18n
from .phonetics import PhoneticService
from .speech import SpeechService
from .translation.classifier import ErrorClassifier
from .translation.exceptions import AllServicesFailedError, InvalidTranslationRequest
from .translation.factory import TranslatorFactory
from .translation.metadata import DEFAULT_TRANSLATOR_ID, TranslatorMetadata
from .translation.result import TranslationRequest, TranslationResult
from .translation.transport import HttpTransport, ProxyFetcher

logger = logging.getLogger(__name__)


class TranslationController:
    """翻訳リクエストのオーケストレーション"""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        transport: Optional[HttpTransport] = None,
        phonetic_service: Optional[PhoneticService] = None,
        proxy_fetcher: Optional[ProxyFetcher] = None,
        speech: Optional[SpeechService] = None,
        i18n: Optional[I18nManager] = None,
        factory: Optional[TranslatorFactory] = None,
    ):
        """
        Args:
            config: 既定設定への上書き（部分指定可）
            transport: 共有 HTTP トランスポート（None なら生成して所有する）
            phonetic_service: 発音表記サービス（None なら transport で生成）
            proxy_fetcher: OpenAI 互換サービス用の中継フェッチ
            speech: 読み上げサービス
            i18n: 表示文字列サービス（None なら組み込み文言で生成）
            factory: 翻訳サービスのファクトリー（None なら生成）

        Raises:
            ValueError: 設定の検証に失敗した場合
        """
        merged = merge_config(get_default_config(), config)
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(timeout=merged["network"]["timeout"])
        self.phonetic_service = phonetic_service or PhoneticService(
            self.transport, endpoint=merged["endpoints"]["dictionary"]
        )
        self.factory = factory or TranslatorFactory(
            merged,
            phonetic_service=self.phonetic_service,
            transport=self.transport,
            proxy_fetcher=proxy_fetcher,
        )
        self.speech = speech or SpeechService()
        self.i18n = i18n or build_default_i18n()
        self._generation = 0

    @property
    def current_generation(self) -> int:
        """最後に受け付けたリクエストの世代番号"""
        return self._generation

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """
        リクエストを翻訳

        失敗時はエラーを分類し、フォールバック可能なら既定サービスで1回だけ再試行する。

        Args:
            request: 翻訳リクエスト

        Returns:
            TranslationResult（service_id と generation を付与済み）

        Raises:
            InvalidTranslationRequest: 引数が不正な場合
            TranslationError: フォールバック不可のエラー（元のエラーをそのまま送出）
            AllServicesFailedError: フォールバックも失敗した場合
        """
        self._generation += 1
        generation = self._generation

        translator = self.factory.get_translator(request.service_id)
        try:
            result = await translator.translate(
                request.text,
                request.source_lang,
                request.target_lang,
                request.ui_language,
            )
        except InvalidTranslationRequest:
            raise
        except Exception as error:
            result = await self._handle_error(error, request)
        else:
            result.service_id = translator.get_translator_name()

        result.generation = generation
        return result

    async def translate_text(
        self,
        text: str,
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
        service_id: Optional[str] = None,
        ui_language: Optional[str] = None,
    ) -> TranslationResult:
        """省略した項目を現在の設定で補って translate を呼ぶ"""
        settings = self.factory.config["translation"]
        request = TranslationRequest(
            text=text,
            source_lang=source_lang or settings["source_lang"],
            target_lang=target_lang or settings["target_lang"],
            service_id=service_id or settings["service"],
            ui_language=ui_language or settings["ui_language"],
        )
        return await self.translate(request)

    async def _handle_error(
        self, error: Exception, request: TranslationRequest
    ) -> TranslationResult:
        classification = ErrorClassifier.classify(error)
        if not classification.should_fallback:
            logger.info(
                "Translation with %s failed (%s), not falling back",
                request.service_id,
                classification.kind.value,
            )
            raise error

        logger.warning(
            "Translation with %s failed (%s: %s), falling back to %s",
            request.service_id,
            classification.kind.value,
            error,
            DEFAULT_TRANSLATOR_ID,
        )
        fallback = self.factory.get_translator(DEFAULT_TRANSLATOR_ID)
        try:
            result = await fallback.translate(
                request.text,
                request.source_lang,
                request.target_lang,
                request.ui_language,
            )
        except Exception as fallback_error:
            logger.error("Fallback translation failed: %s", fallback_error)
            raise AllServicesFailedError(error, fallback_error) from fallback_error

        result.service_id = fallback.get_translator_name()
        result.fallback_notice = self.i18n.translate(
            "fallback_notice",
            language=request.ui_language,
            error=self.describe_error(error, request.ui_language),
            service=self.service_display_name(DEFAULT_TRANSLATOR_ID, request.ui_language),
        )
        return result

    def describe_error(self, error: BaseException, ui_language: Optional[str] = None) -> str:
        """
        エラーを表示用の文字列に変換

        文言は分類（ErrorKind）から引き、メッセージ文字列では判定しない。
        元のエラーメッセージは分類の文言の後ろに付け加える。
        """
        if isinstance(error, AllServicesFailedError):
            return self.i18n.translate(
                "errors.all_services_failed",
                language=ui_language,
                default="All translation services failed",
            )
        if isinstance(error, InvalidTranslationRequest):
            text = self.i18n.translate(
                "errors.invalid_request",
                language=ui_language,
                default="Invalid translation request",
            )
            return f"{text}: {error}"

        kind = ErrorClassifier.classify(error).kind
        text = self.i18n.translate(
            f"errors.{kind.value}", language=ui_language, default=kind.value
        )
        message = getattr(error, "message", None) or str(error)
        if message and message != text:
            text = f"{text}: {message}"
        return text

    def service_display_name(self, service_id: str, ui_language: Optional[str] = None) -> str:
        """サービスの表示名（UI 言語）"""
        info = TranslatorMetadata.get(service_id)
        default = info.display_name if info else service_id
        return self.i18n.translate(f"service.{service_id}", language=ui_language, default=default)

    def is_latest(self, result: TranslationResult) -> bool:
        """結果が最新のリクエストのものか（古い結果は表示しない）"""
        return result.generation is not None and result.generation == self._generation

    def update_config(self, partial: Optional[Dict[str, Any]]) -> None:
        """
        設定を部分更新

        ファクトリーのキャッシュは破棄され、次のリクエストから新しい設定が使われる。
        """
        self.factory.update_config(partial)
        config = self.factory.config
        self.phonetic_service.endpoint = config["endpoints"]["dictionary"].rstrip("/")
        if self._owns_transport:
            self.transport.set_timeout(config["network"]["timeout"])

    def speak(self, text: str, lang: str) -> None:
        """テキストを読み上げる"""
        self.speech.speak(text, lang)

    def stop_speech(self) -> None:
        """読み上げを停止"""
        self.speech.stop()

    async def aclose(self) -> None:
        """所有している HTTP トランスポートを閉じる"""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> TranslationController:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
