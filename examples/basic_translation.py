#!/usr/bin/env python3
"""基本的な翻訳の例.

TranslationController を使った最小構成のサンプルです。
インターネット接続が必要です。

使用方法:
    python examples/basic_translation.py

    # カスタムテキストとサービスを指定
    python examples/basic_translation.py "ありがとう" gemini

環境変数:
    POPUP_TRANSLATE_GEMINI_API_KEY: Gemini の API キー
    POPUP_TRANSLATE_SOURCE_LANG: ソース言語、デフォルト: auto
    POPUP_TRANSLATE_TARGET_LANG: ターゲット言語、デフォルト: vi
"""

from __future__ import annotations

import asyncio
import os
import sys

from popup_translate import TranslationController, TranslationError
from popup_translate.config import build_core_config, config_from_env


async def run(text: str, service_id: str) -> int:
    source_lang = os.getenv("POPUP_TRANSLATE_SOURCE_LANG", "auto")
    target_lang = os.getenv("POPUP_TRANSLATE_TARGET_LANG", "vi")

    print("=== Basic Translation Example ===")
    print(f"Service: {service_id}")
    print(f"Source language: {source_lang}")
    print(f"Target language: {target_lang}")
    print(f"Input text: {text}")
    print()

    config = build_core_config(config_from_env())
    async with TranslationController(config) as controller:
        try:
            result = await controller.translate_text(
                text,
                source_lang=source_lang,
                target_lang=target_lang,
                service_id=service_id,
            )
        except TranslationError as e:
            print(f"Translation failed: {controller.describe_error(e)}")
            return 1

    if result.fallback_notice:
        print(result.fallback_notice)
        print()
    print(f"Translation: {result.translation}")
    if result.src_phonetic:
        print(f"Source phonetic: /{result.src_phonetic}/")
    if result.target_phonetic:
        print(f"Target phonetic: /{result.target_phonetic}/")
    if result.detected_lang:
        print(f"Detected language: {result.detected_lang}")
    print(f"Service used: {result.service_id}")
    return 0


def main() -> None:
    """メイン処理."""
    text = sys.argv[1] if len(sys.argv) > 1 else "hello"
    service_id = sys.argv[2] if len(sys.argv) > 2 else "google"
    sys.exit(asyncio.run(run(text, service_id)))


if __name__ == "__main__":
    main()
