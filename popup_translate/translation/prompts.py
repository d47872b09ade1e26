"""
LLM 翻訳用プロンプトと応答パース

Gemini / OpenAI 互換アダプタで共通のプロンプトを組み立て、
モデル応答（JSON オブジェクトを期待）を TranslationResult に変換する。
応答のパースは失敗しても例外を送出せず、生テキストを翻訳として扱う。
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from .result import TranslationResult

logger = logging.getLogger(__name__)

TEXT_START = "<<<TEXT>>>"
TEXT_END = "<<<END>>>"

_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?|\n?```\s*$")
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

PROMPT_TEMPLATE = """You are a professional translator. Translate the text between {start} and {end} from {source} to {target}.

Adapt to the kind of content:
- A single word: give the most common meaning in {target}.
- A phrase or idiom: translate the meaning naturally, not word by word.
- A sentence or paragraph: keep the tone, punctuation and line breaks of the original.

Respond with a single JSON object and nothing else, with exactly these keys:
{{"translation": "<translated text>", "sourcePhonetic": "<pronunciation of the original text, or empty string>", "targetPhonetic": "<pronunciation of the translated text, or empty string>"}}

Use IPA for English and a common romanization for other languages (for example romaji for Japanese, pinyin for Chinese).
Do not wrap the JSON in markdown.

{start}
{text}
{end}"""


def build_translation_prompt(text: str, source_name: str, target_name: str) -> str:
    """
    翻訳プロンプトを組み立てる

    Args:
        text: 翻訳対象テキスト
        source_name: ソース言語名（"auto" の場合は "the source language"）
        target_name: ターゲット言語名

    Returns:
        プロンプト文字列
    """
    return PROMPT_TEMPLATE.format(
        start=TEXT_START,
        end=TEXT_END,
        source=source_name,
        target=target_name,
        text=text,
    )


def strip_code_fences(content: str) -> str:
    """```json ... ``` のようなコードフェンスを除去"""
    return _FENCE_RE.sub("", content.strip()).strip()


def extract_reply_text(data: Any) -> Optional[str]:
    """
    モデル応答本文からテキストを取り出す

    OpenAI 形式（choices[0].message.content）と
    Gemini 形式（candidates[0].content.parts[].text）の両方に対応。

    Returns:
        応答テキスト、どちらの形式でもなければ None
    """
    if not isinstance(data, dict):
        return None

    choices = data.get("choices")
    if isinstance(choices, list) and choices:
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"]

    candidates = data.get("candidates")
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        content = candidates[0].get("content") or {}
        parts = content.get("parts") if isinstance(content, dict) else None
        if isinstance(parts, list):
            texts = [
                part["text"]
                for part in parts
                if isinstance(part, dict) and isinstance(part.get("text"), str)
            ]
            if texts:
                return "".join(texts)

    return None


def _load_object(content: str) -> Optional[dict]:
    try:
        parsed = json.loads(content)
    except ValueError:
        # 前後に説明文が付いている場合は最初の { から最後の } までを試す
        match = _OBJECT_RE.search(content)
        if match is None:
            return None
        try:
            parsed = json.loads(match.group(0))
        except ValueError:
            return None
    return parsed if isinstance(parsed, dict) else None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_translation_reply(content: Optional[str]) -> TranslationResult:
    """
    モデル応答テキストを TranslationResult に変換

    JSON として解釈できない場合は、応答全体を翻訳テキストとし
    発音表記は空にする（例外は送出しない）。

    Args:
        content: モデル応答テキスト

    Returns:
        TranslationResult
    """
    if not content:
        return TranslationResult(translation="", src_phonetic="", target_phonetic="")

    cleaned = strip_code_fences(content)
    parsed = _load_object(cleaned)
    if parsed is None or "translation" not in parsed:
        logger.debug("Model reply is not a translation object, using raw text")
        return TranslationResult(
            translation=content.strip(), src_phonetic="", target_phonetic=""
        )

    return TranslationResult(
        translation=_as_text(parsed.get("translation")).strip(),
        src_phonetic=_as_text(parsed.get("sourcePhonetic")).strip(),
        target_phonetic=_as_text(parsed.get("targetPhonetic")).strip(),
    )
