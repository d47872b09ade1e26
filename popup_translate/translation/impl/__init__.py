"""
翻訳サービス実装

各翻訳サービスの実装を格納するサブパッケージ。

- google.py: Google Translate（非公式 REST、既定・フォールバック先）
- gemini.py: Gemini generateContent（LLM）
- openai_compat.py: OpenAI 互換ローカルプロキシ（LLM）
- mymemory.py: MyMemory 翻訳メモリ
"""

from __future__ import annotations

from .gemini import GeminiTranslator
from .google import GoogleTranslator
from .mymemory import MyMemoryTranslator
from .openai_compat import OpenAICompatibleTranslator

__all__ = [
    "GeminiTranslator",
    "GoogleTranslator",
    "MyMemoryTranslator",
    "OpenAICompatibleTranslator",
]
