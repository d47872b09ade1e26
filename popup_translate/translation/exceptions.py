"""
翻訳エラーの例外クラス

プロバイダ呼び出しで発生したエラーは TranslationError として送出し、
分類結果（ErrorClassification）を属性として保持する。
呼び出し側はメッセージ文字列ではなく ``error.kind`` / ``error.should_fallback`` で分岐する。
"""

from __future__ import annotations

from typing import Optional

from .classifier import ErrorClassification, ErrorKind


class TranslationError(Exception):
    """翻訳エラーの基底クラス"""

    def __init__(
        self,
        message: str,
        *,
        classification: ErrorClassification,
        status: Optional[int] = None,
        service_id: Optional[str] = None,
    ):
        """
        Args:
            message: エラーメッセージ（表示可能な文字列）
            classification: エラー分類
            status: HTTP ステータス（受信できた場合）
            service_id: エラーを送出したプロバイダ ID
        """
        super().__init__(message)
        self.message = message
        self.classification = classification
        self.status = status
        self.service_id = service_id

    @property
    def kind(self) -> ErrorKind:
        return self.classification.kind

    @property
    def should_fallback(self) -> bool:
        return self.classification.should_fallback


class AllServicesFailedError(TranslationError):
    """
    プライマリとフォールバックの両方が失敗した

    フォールバックは1段のみのため should_fallback は常に False。
    kind はフォールバック側エラーの分類を引き継ぐ。
    """

    def __init__(self, primary_error: BaseException, fallback_error: BaseException):
        self.primary_error = primary_error
        self.fallback_error = fallback_error
        if isinstance(fallback_error, TranslationError):
            kind = fallback_error.kind
        else:
            kind = ErrorKind.UNKNOWN
        super().__init__(
            "All translation services failed",
            classification=ErrorClassification(kind=kind, should_fallback=False),
        )


class InvalidTranslationRequest(ValueError):
    """
    リクエストの事前条件違反

    ネットワーク呼び出し前に検出されるため、エラー分類・フォールバックの対象外。
    """

    pass
