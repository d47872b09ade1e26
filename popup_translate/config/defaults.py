"""Default configuration values for the translation core."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Optional

# NOTE:
# The core never reads settings from storage. Hosts inject overrides through
# TranslatorFactory.update_config / TranslationController.update_config, and
# anything they leave out falls back to these values.

DEFAULT_CONFIG: Dict[str, Any] = {
    "translation": {
        "source_lang": "auto",
        "target_lang": "vi",
        "service": "google",
        "ui_language": "en",
    },
    "api_keys": {
        "gemini": None,
        "openai": None,
    },
    "endpoints": {
        "google": "https://translate.googleapis.com/translate_a/single",
        "gemini": "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        "openai": "http://127.0.0.1:8317/v1/chat/completions",
        "mymemory": "https://api.mymemory.translated.net/get",
        "dictionary": "https://api.dictionaryapi.dev/api/v2/entries/en",
    },
    "models": {
        "gemini": "gemini-2.0-flash-lite",
        "openai": "gpt-4o-mini",
    },
    "network": {
        "timeout": 30.0,
    },
    "logging": {
        "level": "INFO",
    },
}


def get_default_config() -> Dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return deepcopy(DEFAULT_CONFIG)


def merge_config(base: Dict[str, Any], override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    Args:
        base: The base configuration that provides default values.
        override: Overrides coming from callers (can be None).

    Returns:
        A new dictionary containing the merged configuration.
    """
    if override is None:
        return deepcopy(base)

    merged = deepcopy(base)
    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged
