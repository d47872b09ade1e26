"""
翻訳サービスのメタデータ管理

翻訳サービスの登録情報とファクトリー生成用メタデータを管理する。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

# 未知のサービス ID の解決先、およびフォールバック先
DEFAULT_TRANSLATOR_ID = "google"


@dataclass
class TranslatorInfo:
    """翻訳サービスのメタデータ"""

    translator_id: str
    display_name: str
    description: str
    module: str  # e.g., ".impl.google"
    class_name: str  # e.g., "GoogleTranslator"
    requires_api_key: bool = False  # API キー必須か
    api_key_name: Optional[str] = None  # config["api_keys"] 内のキー名


class TranslatorMetadata:
    """翻訳サービスのメタデータ管理"""

    _TRANSLATORS: Dict[str, TranslatorInfo] = {
        "google": TranslatorInfo(
            translator_id="google",
            display_name="Google Translate",
            description="Unofficial Google Translate REST endpoint (no key)",
            module=".impl.google",
            class_name="GoogleTranslator",
        ),
        "gemini": TranslatorInfo(
            translator_id="gemini",
            display_name="Gemini",
            description="Google Gemini generateContent API (LLM)",
            module=".impl.gemini",
            class_name="GeminiTranslator",
            requires_api_key=True,
            api_key_name="gemini",
        ),
        "openai": TranslatorInfo(
            translator_id="openai",
            display_name="OpenAI-compatible proxy",
            description="Local OpenAI-compatible chat completions proxy (LLM)",
            module=".impl.openai_compat",
            class_name="OpenAICompatibleTranslator",
            requires_api_key=False,  # ローカルプロキシはキー任意
            api_key_name="openai",
        ),
        "mymemory": TranslatorInfo(
            translator_id="mymemory",
            display_name="MyMemory",
            description="MyMemory community translation memory (no key)",
            module=".impl.mymemory",
            class_name="MyMemoryTranslator",
        ),
    }

    @classmethod
    def get(cls, translator_id: str) -> Optional[TranslatorInfo]:
        """
        翻訳サービスのメタデータを取得

        Args:
            translator_id: 翻訳サービスID

        Returns:
            TranslatorInfo、見つからない場合は None
        """
        return cls._TRANSLATORS.get(translator_id)

    @classmethod
    def get_all(cls) -> Dict[str, TranslatorInfo]:
        """全ての翻訳サービスメタデータを取得"""
        return cls._TRANSLATORS.copy()

    @classmethod
    def list_translator_ids(cls) -> List[str]:
        """利用可能な翻訳サービスIDのリストを取得"""
        return list(cls._TRANSLATORS.keys())

    @classmethod
    def resolve(cls, translator_id: Optional[str]) -> str:
        """
        サービス ID を登録済み ID に解決

        未登録・空の ID は DEFAULT_TRANSLATOR_ID になる。
        """
        if translator_id and translator_id in cls._TRANSLATORS:
            return translator_id
        return DEFAULT_TRANSLATOR_ID
