"""Core configuration helpers exposed to hosts and the CLI."""

from .builder import build_core_config, config_from_env, settings_to_config_update
from .defaults import DEFAULT_CONFIG, get_default_config, merge_config
from .validator import ConfigValidator, ValidationError

__all__ = [
    "DEFAULT_CONFIG",
    "get_default_config",
    "merge_config",
    "ConfigValidator",
    "ValidationError",
    "build_core_config",
    "config_from_env",
    "settings_to_config_update",
]
