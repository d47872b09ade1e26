"""Utilities for normalising host settings to the core config schema."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any, Dict, Mapping, Optional

from .defaults import get_default_config, merge_config
from .validator import ConfigValidator

CoreConfigDict = Dict[str, Any]

# Core が扱うトップレベルセクション
_CORE_SECTIONS = (
    "translation",
    "api_keys",
    "endpoints",
    "models",
    "network",
    "logging",
)

# ホスト（ポップアップ UI）側の設定キー → (セクション, キー)
_SETTINGS_KEY_MAP = {
    "sourceLang": ("translation", "source_lang"),
    "targetLang": ("translation", "target_lang"),
    "translationService": ("translation", "service"),
    "uiLanguage": ("translation", "ui_language"),
    "geminiApiKey": ("api_keys", "gemini"),
    "openaiApiKey": ("api_keys", "openai"),
    "openaiEndpoint": ("endpoints", "openai"),
}

ENV_PREFIX = "POPUP_TRANSLATE_"

_ENV_KEY_MAP = {
    f"{ENV_PREFIX}GEMINI_API_KEY": ("api_keys", "gemini"),
    f"{ENV_PREFIX}OPENAI_API_KEY": ("api_keys", "openai"),
    f"{ENV_PREFIX}OPENAI_ENDPOINT": ("endpoints", "openai"),
}


def settings_to_config_update(settings: Optional[Mapping[str, Any]]) -> CoreConfigDict:
    """Convert host-style settings (camelCase keys) into a partial core config.

    Keys the core does not know about (UI state and the like) are dropped.
    Empty strings for API keys are treated as "not configured".
    """
    update: CoreConfigDict = {}
    for key, value in (settings or {}).items():
        target = _SETTINGS_KEY_MAP.get(key)
        if target is None:
            continue
        section, name = target
        if section == "api_keys" and not value:
            value = None
        update.setdefault(section, {})[name] = value
    return update


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> CoreConfigDict:
    """Collect API keys and the proxy endpoint from environment variables."""
    environ = os.environ if environ is None else environ
    update: CoreConfigDict = {}
    for env_name, (section, name) in _ENV_KEY_MAP.items():
        value = environ.get(env_name)
        if value:
            update.setdefault(section, {})[name] = value
    return update


def build_core_config(raw_config: Optional[Mapping[str, Any]]) -> CoreConfigDict:
    """Normalize host/raw configuration into the core schema.

    - camelCase のホスト設定キーを core のセクションへ写像
    - core のセクション以外のキーを除去
    - CoreConfig TypedDict に沿って `ConfigValidator` を適用
    """
    source = dict(raw_config or {})
    defaults = get_default_config()
    host_update = settings_to_config_update(source)
    core_config: CoreConfigDict = {}

    for section in _CORE_SECTIONS:
        default_section = deepcopy(defaults[section])
        override = source.get(section)
        override_mapping = dict(override) if isinstance(override, Mapping) else {}
        merged = merge_config(default_section, override_mapping)
        core_config[section] = merge_config(merged, host_update.get(section))

    ConfigValidator.validate_or_raise(core_config)
    return core_config
