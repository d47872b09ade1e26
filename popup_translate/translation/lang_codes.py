"""
言語コード正規化ユーティリティ

BCP-47 言語コードの正規化、言語判定、プロンプト・UI 用の言語名取得を提供。
langcodes ライブラリを使用。
"""

from typing import Dict, List, Optional

import langcodes

# ソース言語の自動検出を表す特別なコード
AUTO = "auto"

ENGLISH = "en"
VIETNAMESE = "vi"

# LLM プロンプト用の言語名マッピング
LANGUAGE_NAMES = {
    "en": "English",
    "vi": "Vietnamese",
    "ja": "Japanese",
    "ko": "Korean",
    "zh-CN": "Chinese",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "ru": "Russian",
}

# UI で選択可能な言語（表示順）
SUPPORTED_LANGUAGES: List[str] = list(LANGUAGE_NAMES.keys())

AUTO_LANGUAGE_NAME = "the source language"


def to_iso639_1(code: str) -> str:
    """
    BCP-47 言語コードを ISO 639-1 に変換

    Args:
        code: 言語コード（"ja", "zh-CN", "EN-us" など）

    Returns:
        ISO 639-1 言語コード（"ja", "zh", "en" など）

    Examples:
        >>> to_iso639_1("zh-CN")
        'zh'
        >>> to_iso639_1("EN-us")
        'en'
    """
    return langcodes.Language.get(code).language


def is_language(code: Optional[str], iso: str) -> bool:
    """
    言語コードが指定の ISO 639-1 言語を表すか判定

    "auto"・空文字・解釈できないコードは常に False。

    Examples:
        >>> is_language("en-US", "en")
        True
        >>> is_language("auto", "en")
        False
    """
    if not code or code == AUTO:
        return False
    try:
        return to_iso639_1(code) == iso
    except ValueError:
        # langcodes.tag_parser.LanguageTagError は ValueError のサブクラス
        return False


def normalize_for_google(lang: str) -> str:
    """
    Google Translate 用に正規化

    Note: Google は zh-CN/zh-TW を区別するため、
          元の入力が zh-TW なら維持する。"auto" はそのまま渡す。

    Examples:
        >>> normalize_for_google("zh")
        'zh-CN'
        >>> normalize_for_google("zh-TW")
        'zh-TW'
    """
    if lang == AUTO:
        return AUTO
    if lang.lower() in ("zh-tw", "zh-hant"):
        return "zh-TW"
    try:
        iso = to_iso639_1(lang)
    except ValueError:
        return lang
    if iso == "zh":
        return "zh-CN"
    return iso


def get_language_name(lang: str) -> str:
    """
    プロンプト用に英語の言語名を取得

    Args:
        lang: 言語コード、または "auto"

    Returns:
        英語での言語名（例: "Vietnamese"）。"auto" は "the source language"
    """
    if lang == AUTO:
        return AUTO_LANGUAGE_NAME
    if lang in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[lang]
    try:
        if to_iso639_1(lang) == "zh" and lang.lower() not in ("zh-tw", "zh-hant"):
            return LANGUAGE_NAMES["zh-CN"]
        # 未知の言語は langcodes から取得（language_data が必要）
        return langcodes.Language.get(lang).display_name()
    except ValueError:
        return lang


def get_display_names(language: str = ENGLISH) -> Dict[str, str]:
    """
    選択可能な言語の表示名を UI 言語で取得

    Args:
        language: 表示に使う言語コード

    Returns:
        言語コードをキーとした表示名の辞書
    """
    return {
        code: langcodes.Language.get(code).display_name(language)
        for code in SUPPORTED_LANGUAGES
    }
