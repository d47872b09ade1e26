"""TypedDict definitions for the translation core configuration.

Annotations are evaluated eagerly (no ``from __future__ import annotations``)
so that ConfigValidator can inspect them with ``typing.get_type_hints``.
"""

from typing import Literal, Optional, TypedDict, Union

__all__ = [
    "TranslationConfig",
    "ApiKeysConfig",
    "EndpointsConfig",
    "ModelsConfig",
    "NetworkConfig",
    "LoggingConfig",
    "CoreConfig",
]


class TranslationConfig(TypedDict, total=False):
    source_lang: str
    target_lang: str
    # Unknown ids are accepted and resolve to the default service at runtime.
    service: str
    ui_language: str


class ApiKeysConfig(TypedDict, total=False):
    gemini: Optional[str]
    openai: Optional[str]


class EndpointsConfig(TypedDict, total=False):
    google: str
    gemini: str
    openai: str
    mymemory: str
    dictionary: str


class ModelsConfig(TypedDict, total=False):
    gemini: str
    openai: str


class NetworkConfig(TypedDict, total=False):
    timeout: Union[int, float]


class LoggingConfig(TypedDict, total=False):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class _CoreConfigRequired(TypedDict):
    translation: TranslationConfig
    endpoints: EndpointsConfig


class CoreConfig(_CoreConfigRequired, total=False):
    api_keys: ApiKeysConfig
    models: ModelsConfig
    network: NetworkConfig
    logging: LoggingConfig
