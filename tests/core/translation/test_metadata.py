"""
TranslatorMetadata のテスト
"""

from __future__ import annotations

from popup_translate.translation.metadata import (
    DEFAULT_TRANSLATOR_ID,
    TranslatorInfo,
    TranslatorMetadata,
)


class TestTranslatorMetadata:
    """TranslatorMetadata のテスト"""

    def test_get_google(self):
        info = TranslatorMetadata.get("google")
        assert isinstance(info, TranslatorInfo)
        assert info.module == ".impl.google"
        assert info.class_name == "GoogleTranslator"
        assert info.requires_api_key is False

    def test_gemini_requires_key(self):
        info = TranslatorMetadata.get("gemini")
        assert info.requires_api_key is True
        assert info.api_key_name == "gemini"

    def test_openai_key_is_optional(self):
        """ローカルプロキシはキー任意"""
        info = TranslatorMetadata.get("openai")
        assert info.requires_api_key is False
        assert info.api_key_name == "openai"

    def test_get_unknown_returns_none(self):
        assert TranslatorMetadata.get("deepl") is None

    def test_list_translator_ids(self):
        assert TranslatorMetadata.list_translator_ids() == [
            "google",
            "gemini",
            "openai",
            "mymemory",
        ]

    def test_get_all_returns_copy(self):
        all_translators = TranslatorMetadata.get_all()
        all_translators.pop("google")
        assert TranslatorMetadata.get("google") is not None


class TestResolve:
    def test_known_id(self):
        assert TranslatorMetadata.resolve("mymemory") == "mymemory"

    def test_unknown_id_resolves_to_default(self):
        assert TranslatorMetadata.resolve("deepl") == DEFAULT_TRANSLATOR_ID
        assert TranslatorMetadata.resolve(None) == DEFAULT_TRANSLATOR_ID
        assert DEFAULT_TRANSLATOR_ID == "google"
