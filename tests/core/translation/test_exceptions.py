"""
翻訳例外クラスのテスト
"""

from __future__ import annotations

from popup_translate.translation.classifier import ErrorClassification, ErrorKind
from popup_translate.translation.exceptions import (
    AllServicesFailedError,
    InvalidTranslationRequest,
    TranslationError,
)


class TestExceptionHierarchy:
    """例外クラス階層のテスト"""

    def test_translation_error_is_exception(self):
        assert issubclass(TranslationError, Exception)

    def test_all_services_failed_is_translation_error(self):
        assert issubclass(AllServicesFailedError, TranslationError)

    def test_invalid_request_is_value_error(self):
        """InvalidTranslationRequest は分類対象外の ValueError"""
        assert issubclass(InvalidTranslationRequest, ValueError)
        assert not issubclass(InvalidTranslationRequest, TranslationError)


class TestTranslationError:
    """TranslationError の属性"""

    def test_attributes(self):
        error = TranslationError(
            "Service Unavailable",
            classification=ErrorClassification.for_kind(ErrorKind.SERVER_ERROR),
            status=503,
            service_id="gemini",
        )
        assert str(error) == "Service Unavailable"
        assert error.message == "Service Unavailable"
        assert error.kind == ErrorKind.SERVER_ERROR
        assert error.should_fallback is True
        assert error.status == 503
        assert error.service_id == "gemini"


class TestAllServicesFailedError:
    """フォールバック失敗時の例外"""

    def test_message_and_causes(self):
        primary = TranslationError(
            "boom", classification=ErrorClassification.for_kind(ErrorKind.SERVER_ERROR)
        )
        fallback = TranslationError(
            "offline", classification=ErrorClassification.for_kind(ErrorKind.NETWORK_ERROR)
        )
        error = AllServicesFailedError(primary, fallback)

        assert str(error) == "All translation services failed"
        assert error.primary_error is primary
        assert error.fallback_error is fallback
        assert error.kind == ErrorKind.NETWORK_ERROR
        assert error.should_fallback is False

    def test_non_translation_fallback_error_is_unknown(self):
        primary = TranslationError(
            "boom", classification=ErrorClassification.for_kind(ErrorKind.SERVER_ERROR)
        )
        error = AllServicesFailedError(primary, RuntimeError("bug"))
        assert error.kind == ErrorKind.UNKNOWN
        assert error.should_fallback is False
