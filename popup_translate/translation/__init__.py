"""
翻訳プラグインシステム

複数の翻訳サービス（Google Translate, Gemini, OpenAI 互換プロキシ, MyMemory）を
共通のインターフェースで扱い、エラー分類と発音表記の補完を共通化する。

Usage:
    from popup_translate.translation import TranslatorFactory

    factory = TranslatorFactory({"api_keys": {"gemini": "AI..."}})
    translator = factory.get_translator("gemini")
    result = await translator.translate("ありがとう", "ja", "vi")
    print(result.translation)  # "Cảm ơn"
"""

from __future__ import annotations

from .base import BaseTranslator
from .classifier import ErrorClassification, ErrorClassifier, ErrorKind
from .exceptions import (
    AllServicesFailedError,
    InvalidTranslationRequest,
    TranslationError,
)
from .factory import TranslatorFactory
from .lang_codes import (
    AUTO,
    get_language_name,
    is_language,
    normalize_for_google,
    to_iso639_1,
)
from .metadata import DEFAULT_TRANSLATOR_ID, TranslatorInfo, TranslatorMetadata
from .prompts import build_translation_prompt, parse_translation_reply
from .result import TranslationRequest, TranslationResult
from .transport import HttpTransport, HttpxProxyFetcher, ProxyFetcher, ProxyResponse

__all__ = [
    # Core classes
    "BaseTranslator",
    "TranslationRequest",
    "TranslationResult",
    "TranslatorFactory",
    "TranslatorMetadata",
    "TranslatorInfo",
    "DEFAULT_TRANSLATOR_ID",
    # Errors
    "ErrorClassification",
    "ErrorClassifier",
    "ErrorKind",
    "TranslationError",
    "AllServicesFailedError",
    "InvalidTranslationRequest",
    # Transport
    "HttpTransport",
    "HttpxProxyFetcher",
    "ProxyFetcher",
    "ProxyResponse",
    # Prompts
    "build_translation_prompt",
    "parse_translation_reply",
    # Language code utilities
    "AUTO",
    "to_iso639_1",
    "is_language",
    "normalize_for_google",
    "get_language_name",
]
