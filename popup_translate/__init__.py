"""Canonical re-exports for the popup-translate public API surface.

ホスト（ポップアップ UI や外部ツール）が `popup_translate` 直下から
主要シンボルを取得できるようにする。

- TranslationController: 翻訳・フォールバック・読み上げの窓口
- TranslationRequest, TranslationResult: 入出力の型
- TranslationError, ErrorKind: エラー分類
- PhoneticService: 英語の発音表記
"""

__version__ = "0.1.0"

from .controller import TranslationController
from .i18n import I18nManager
from .phonetics import PhoneticService
from .speech import SpeechService, Utterance
from .translation import (
    AllServicesFailedError,
    ErrorKind,
    InvalidTranslationRequest,
    TranslationError,
    TranslationRequest,
    TranslationResult,
    TranslatorFactory,
)

__all__ = [
    "__version__",
    "TranslationController",
    "TranslationRequest",
    "TranslationResult",
    "TranslatorFactory",
    "TranslationError",
    "AllServicesFailedError",
    "InvalidTranslationRequest",
    "ErrorKind",
    "PhoneticService",
    "SpeechService",
    "Utterance",
    "I18nManager",
]
