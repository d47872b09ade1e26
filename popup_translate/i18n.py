"""軽量な表示文字列サービスのためのユーティリティ

エラーメッセージやフォールバック通知の文言は UI 言語ごとのフォールバック表から引く。
ホストが独自の翻訳関数を登録した場合はそちらを優先する。
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class TranslatorDetails:
    registered: bool
    name: Optional[str] = None
    extras: Tuple[str, ...] = ()
    metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class I18nDiagnostics:
    translator: TranslatorDetails
    fallback_count: int
    fallback_keys_sample: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()


def normalize_language(language: Optional[str]) -> str:
    """"vi-VN" → "vi" のように主言語サブタグだけを残す"""
    if not language:
        return DEFAULT_LANGUAGE
    return language.replace("_", "-").split("-")[0].lower()


class I18nManager:
    """コア層で使用する簡易的な表示文字列マネージャ"""

    def __init__(self, default_language: str = DEFAULT_LANGUAGE) -> None:
        self.default_language = normalize_language(default_language)
        self._translator: Optional[Callable[..., str]] = None
        self._fallbacks: Dict[str, Dict[str, str]] = {}
        self._translator_details = TranslatorDetails(registered=False)

    @contextmanager
    def preserve_state(self):
        """テスト用途などで現在の登録状態を一時退避する"""
        translator = self._translator
        fallbacks = {lang: dict(table) for lang, table in self._fallbacks.items()}
        details = self._translator_details
        try:
            yield self
        finally:
            self._translator = translator
            self._fallbacks = fallbacks
            self._translator_details = details

    def register_translator(
        self,
        translator: Callable[..., str],
        *,
        name: Optional[str] = None,
        extras: Optional[Iterable[str]] = None,
        metadata: Optional[Mapping[str, object]] = None,
    ) -> None:
        """翻訳関数を登録（``translator(key, language=..., **kwargs)`` で呼ばれる）"""
        self._translator = translator

        if name is None:
            qualname = getattr(translator, "__qualname__", None)
            module = getattr(translator, "__module__", None)
            if module and qualname:
                name = f"{module}.{qualname}"
            else:
                name = qualname or getattr(translator, "__name__", None)

        extras_tuple = tuple(str(item) for item in extras or ())
        metadata_dict = {str(key): str(value) for key, value in (metadata or {}).items()}

        self._translator_details = TranslatorDetails(
            registered=True,
            name=name,
            extras=extras_tuple,
            metadata=metadata_dict,
        )

    def clear_translator(self) -> None:
        """登録済み翻訳関数を解除"""
        self._translator = None
        self._translator_details = TranslatorDetails(registered=False)

    def register_fallbacks(
        self,
        mapping: Mapping[str, str],
        *,
        namespace: Optional[str] = None,
        language: Optional[str] = None,
    ) -> None:
        """フォールバック用メッセージを登録（language 省略時は既定言語）"""
        table = self._fallbacks.setdefault(
            normalize_language(language or self.default_language), {}
        )
        if namespace:
            for key, value in mapping.items():
                qualified = f"{namespace}.{key}" if key else namespace
                table[qualified] = value
        else:
            table.update(mapping)

    def clear_fallbacks(
        self, *, prefix: Optional[str] = None, language: Optional[str] = None
    ) -> None:
        """登録済みフォールバックを削除"""
        if language is not None:
            tables = [self._fallbacks.get(normalize_language(language), {})]
        else:
            tables = list(self._fallbacks.values())

        for table in tables:
            if prefix is None:
                table.clear()
                continue
            keys = [key for key in table if key.startswith(prefix)]
            for key in keys:
                table.pop(key, None)

    def get_fallback(self, key: str, *, language: Optional[str] = None) -> Optional[str]:
        """フォールバックメッセージを取得（指定言語 → 既定言語の順）"""
        lang = normalize_language(language or self.default_language)
        value = self._fallbacks.get(lang, {}).get(key)
        if value is None and lang != self.default_language:
            value = self._fallbacks.get(self.default_language, {}).get(key)
        return value

    def fallback_keys(self, *, language: Optional[str] = None) -> Tuple[str, ...]:
        """登録済みフォールバックキーの一覧"""
        lang = normalize_language(language or self.default_language)
        return tuple(self._fallbacks.get(lang, {}).keys())

    def languages(self) -> Tuple[str, ...]:
        """フォールバック表が登録されている言語の一覧"""
        return tuple(lang for lang, table in self._fallbacks.items() if table)

    def translate(
        self,
        key: str,
        *,
        language: Optional[str] = None,
        default: Optional[str] = None,
        **kwargs,
    ) -> str:
        """
        表示文字列を取得

        translatorが登録されていない、もしくは翻訳に失敗した場合は
        フォールバック値を使用する。
        """
        lang = normalize_language(language or self.default_language)
        if self._translator:
            try:
                return self._translator(key, language=lang, **kwargs)
            except Exception as exc:  # pragma: no cover - ログのみ
                logger.debug("Translator failed for key '%s': %s", key, exc)

        template = self.get_fallback(key, language=lang)
        if template is None:
            template = default or key

        if kwargs:
            try:
                return template.format(**kwargs)
            except (KeyError, IndexError, ValueError):
                return template

        return template

    def diagnostics(self, *, sample_size: int = 5) -> I18nDiagnostics:
        """登録状態を診断用に返す"""
        keys = [key for table in self._fallbacks.values() for key in table]
        return I18nDiagnostics(
            translator=self._translator_details,
            fallback_count=len(keys),
            fallback_keys_sample=tuple(self.fallback_keys()[:sample_size]),
            languages=self.languages(),
        )


i18n = I18nManager()

translate = i18n.translate
register_translator = i18n.register_translator
register_fallbacks = i18n.register_fallbacks
diagnose = i18n.diagnostics

__all__ = [
    "I18nDiagnostics",
    "I18nManager",
    "TranslatorDetails",
    "i18n",
    "normalize_language",
    "translate",
    "register_translator",
    "register_fallbacks",
    "diagnose",
]
