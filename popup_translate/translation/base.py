"""
翻訳サービスの抽象基底クラス

全ての翻訳サービス実装はこの基底クラスを継承する。
HTTP 呼び出しのエラー分類と、発音表記の補完（enrich_with_phonetics）を共通化する。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from .classifier import ErrorClassification, ErrorClassifier
from .exceptions import InvalidTranslationRequest, TranslationError
from .lang_codes import ENGLISH, VIETNAMESE, is_language
from .transport import HttpTransport

if TYPE_CHECKING:
    from ..phonetics import PhoneticService
    from .result import TranslationResult

logger = logging.getLogger(__name__)


class BaseTranslator(ABC):
    """翻訳サービスの抽象基底クラス"""

    def __init__(
        self,
        phonetic_service: Optional[PhoneticService] = None,
        transport: Optional[HttpTransport] = None,
        **kwargs,
    ):
        """
        翻訳サービスを初期化

        Args:
            phonetic_service: 英語の発音表記を補完するサービス（None なら補完しない）
            transport: 共有 HTTP トランスポート（None なら専用に生成）
            **kwargs: サブクラス固有のパラメータ
        """
        self.phonetic_service = phonetic_service
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport()

    @classmethod
    def from_config(cls, config: Dict[str, Any], **deps) -> BaseTranslator:
        """
        設定辞書からインスタンスを生成

        サブクラスは endpoint / api_key / model 等を config から取り出して
        コンストラクタに渡す。deps はコントローラが所有する共有オブジェクト。
        """
        return cls(**deps)

    @abstractmethod
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
            ui_language: 表示言語

        Returns:
            TranslationResult

        Raises:
            InvalidTranslationRequest: 引数が不正な場合（通信前に検出）
            TranslationError: プロバイダ呼び出しが失敗した場合
        """
        ...

    @abstractmethod
    def get_translator_name(self) -> str:
        """
        翻訳サービス名を取得

        Returns:
            翻訳サービスの識別子（例: "google", "gemini"）
        """
        ...

    def validate_params(self, text: str, source_lang: str, target_lang: str) -> None:
        """
        翻訳パラメータを検証

        Raises:
            InvalidTranslationRequest: テキストが空・文字列でない、または言語コードがない場合
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidTranslationRequest("Text must be a non-empty string")
        if not source_lang or not target_lang:
            raise InvalidTranslationRequest("Source and target languages are required")

    async def enrich_with_phonetics(
        self,
        result: TranslationResult,
        source_text: str,
        source_lang: str,
        target_lang: str,
    ) -> TranslationResult:
        """
        発音表記を補完・除去

        - 実効ソース言語は detected_lang があればそれ、なければ source_lang
        - ベトナム語側の発音表記は常に None
        - プロバイダが返さなかった英語側の発音表記は辞書サービスで補完
        - 空文字は最後に None に正規化

        Args:
            result: アダプタがパースした結果（直接更新して返す）
            source_text: 原文
            source_lang: リクエストのソース言語
            target_lang: ターゲット言語

        Returns:
            更新した TranslationResult
        """
        effective_source = result.detected_lang or source_lang

        if is_language(effective_source, VIETNAMESE):
            result.src_phonetic = None
        elif not result.src_phonetic and is_language(effective_source, ENGLISH):
            result.src_phonetic = await self._lookup_phonetic(source_text)

        if is_language(target_lang, VIETNAMESE):
            result.target_phonetic = None
        elif not result.target_phonetic and is_language(target_lang, ENGLISH):
            result.target_phonetic = await self._lookup_phonetic(result.translation)

        result.src_phonetic = result.src_phonetic or None
        result.target_phonetic = result.target_phonetic or None
        return result

    async def _lookup_phonetic(self, text: str) -> str:
        if self.phonetic_service is None or not text:
            return ""
        return await self.phonetic_service.get_phonetic(text, ENGLISH)

    def _error(
        self,
        message: str,
        classification: ErrorClassification,
        status: Optional[int] = None,
    ) -> TranslationError:
        """このサービスの TranslationError を生成"""
        return TranslationError(
            message,
            classification=classification,
            status=status,
            service_id=self.get_translator_name(),
        )

    def _extract_error_message(self, body: Any) -> str:
        """
        エラーレスポンス本文からメッセージを取り出す

        既定は {"error": {"message": ...}} 形式。サブクラスで上書き可能。
        """
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                return str(error.get("message") or "")
            if isinstance(error, str):
                return error
        return ""

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
        api_key_configured: bool = True,
    ) -> Any:
        """
        HTTP リクエストを送信し JSON 本文を返す

        Raises:
            TranslationError: 通信失敗（network_error）、非 2xx（ステータスで分類）、
                非 JSON 本文（non_json_response）
        """
        client = self.transport.get_client()
        try:
            response = await client.request(
                method, url, params=params, headers=headers, json=json
            )
        except httpx.HTTPError as e:
            raise self._error(
                f"Network error: {e}" if str(e) else "Network error",
                ErrorClassifier.network(),
            ) from e

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = self._extract_error_message(body) or response.reason_phrase
            raise self._error(
                message,
                ErrorClassifier.classify_status(
                    response.status_code,
                    message,
                    api_key_configured=api_key_configured,
                ),
                status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise self._error(
                "Response is not valid JSON",
                ErrorClassifier.non_json(),
                status=response.status_code,
            ) from e

    async def aclose(self) -> None:
        """専用に生成したトランスポートを閉じる"""
        if self._owns_transport:
            await self.transport.aclose()
