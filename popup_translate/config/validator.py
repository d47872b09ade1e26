"""Lightweight configuration validation utilities for the translation core."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from typing import Any, List, Literal, Mapping, Union, get_args, get_origin, get_type_hints

from .schema import CoreConfig

_AUTO = "auto"


@dataclass(frozen=True)
class ValidationError:
    """Represents a single configuration validation failure."""

    path: str
    message: str


class ConfigValidator:
    """Validate structure and a few semantic rules of the core configuration."""

    _ROOT_SCHEMA = CoreConfig

    @classmethod
    def validate(cls, config: Mapping[str, Any]) -> List[ValidationError]:
        """Validate a configuration dictionary and return a list of errors."""
        if not isinstance(config, MappingABC):
            return [
                ValidationError(
                    path="<root>",
                    message="Expected a mapping for the configuration root",
                )
            ]
        errors = cls._validate_typed_dict(config, cls._ROOT_SCHEMA, path="")
        errors.extend(cls._validate_semantics(config))
        return errors

    @classmethod
    def validate_or_raise(cls, config: Mapping[str, Any]) -> None:
        """Validate the configuration and raise ValueError on failure."""
        errors = cls.validate(config)
        if errors:
            details = "\n".join(f"- {err.path}: {err.message}" for err in errors)
            raise ValueError(f"Configuration validation failed:\n{details}")

    # Internal helpers -----------------------------------------------------

    @classmethod
    def _validate_typed_dict(
        cls,
        value: Mapping[str, Any],
        schema: type,
        path: str,
    ) -> List[ValidationError]:
        errors: List[ValidationError] = []
        annotations = get_type_hints(schema)
        required_keys = getattr(schema, "__required_keys__", frozenset())

        for key in sorted(required_keys):
            if key not in value:
                errors.append(
                    ValidationError(path=cls._join(path, key), message="Required key is missing")
                )

        for key in sorted(value.keys()):
            annotation = annotations.get(key)
            if annotation is None:
                errors.append(
                    ValidationError(
                        path=cls._join(path, key),
                        message=f"Unexpected key for {schema.__name__}",
                    )
                )
                continue
            errors.extend(cls._validate_annotation(value[key], annotation, cls._join(path, key)))

        return errors

    @classmethod
    def _validate_annotation(cls, value: Any, annotation: Any, path: str) -> List[ValidationError]:
        if cls._is_typed_dict(annotation):
            if not isinstance(value, MappingABC):
                return [
                    ValidationError(
                        path=path,
                        message=f"Expected {annotation.__name__} structure, got {type(value).__name__}",
                    )
                ]
            return cls._validate_typed_dict(value, annotation, path)

        if not cls._matches_type(value, annotation):
            return [
                ValidationError(
                    path=path,
                    message=f"Expected {cls._describe_annotation(annotation)}, got {type(value).__name__}",
                )
            ]
        return []

    @classmethod
    def _validate_semantics(cls, config: Mapping[str, Any]) -> List[ValidationError]:
        errors: List[ValidationError] = []

        translation = config.get("translation")
        if isinstance(translation, MappingABC):
            if translation.get("target_lang") == _AUTO:
                errors.append(
                    ValidationError(
                        path="translation.target_lang",
                        message="Target language cannot be 'auto'",
                    )
                )
            for key in ("source_lang", "target_lang"):
                if key in translation and not translation[key]:
                    errors.append(
                        ValidationError(
                            path=f"translation.{key}",
                            message="Language code must not be empty",
                        )
                    )

        network = config.get("network")
        if isinstance(network, MappingABC):
            timeout = network.get("timeout")
            if cls._matches_type(timeout, float) and timeout <= 0:
                errors.append(
                    ValidationError(path="network.timeout", message="Timeout must be positive")
                )

        return errors

    @classmethod
    def _matches_type(cls, value: Any, annotation: Any) -> bool:
        if annotation is Any:
            return True
        if annotation is type(None):
            return value is None

        origin = get_origin(annotation)
        if origin is Union:
            return any(cls._matches_type(value, option) for option in get_args(annotation))
        if origin is Literal:
            return value in get_args(annotation)

        if annotation is float:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if annotation is int:
            return isinstance(value, int) and not isinstance(value, bool)
        if isinstance(annotation, type):
            return isinstance(value, annotation)
        return True

    @staticmethod
    def _join(path: str, key: str) -> str:
        return key if not path else f"{path}.{key}"

    @staticmethod
    def _is_typed_dict(annotation: Any) -> bool:
        return (
            isinstance(annotation, type)
            and issubclass(annotation, dict)
            and hasattr(annotation, "__required_keys__")
        )

    @classmethod
    def _describe_annotation(cls, annotation: Any) -> str:
        origin = get_origin(annotation)
        if origin is Union:
            options = " | ".join(cls._describe_annotation(opt) for opt in get_args(annotation))
            return f"({options})"
        if origin is Literal:
            values = ", ".join(repr(arg) for arg in get_args(annotation))
            return f"literal ({values})"
        if annotation is type(None):
            return "None"
        if isinstance(annotation, type):
            return annotation.__name__
        return str(annotation)
