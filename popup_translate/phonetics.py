"""
英語の発音表記サービス

Free Dictionary API（dictionaryapi.dev）から単語ごとに IPA 表記を取得する。
取得結果はプロセス内でキャッシュし、失敗は例外にせず空文字として扱う。
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .translation.lang_codes import VIETNAMESE, is_language
from .translation.transport import HttpTransport

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_ENDPOINT = "https://api.dictionaryapi.dev/api/v2/entries/en"

# これを超える語数のフレーズは単語ごとの取得を行わない
MAX_PHRASE_WORDS = 10

_PUNCTUATION_RE = re.compile(r"[.,!?;:'\"()]")
_IPA_DELIMITERS_RE = re.compile(r"[/\[\]]")


def normalize_word(word: str) -> str:
    """
    キャッシュキー用に単語を正規化（句読点除去・小文字化）

    Examples:
        >>> normalize_word("Hello,")
        'hello'
    """
    return _PUNCTUATION_RE.sub("", word).lower()


def extract_phonetic(data: Any) -> str:
    """辞書 API の応答から最初の発音表記を取り出す（/ と [] は除去）"""
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return ""
    for phonetic in data[0].get("phonetics") or []:
        if isinstance(phonetic, dict) and phonetic.get("text"):
            return _IPA_DELIMITERS_RE.sub("", str(phonetic["text"]))
    return ""


class PhoneticService:
    """
    英単語・短いフレーズの発音表記を取得する

    Examples:
        >>> service = PhoneticService()
        >>> await service.get_phonetic("hello world")
        "həˈləʊ wɜːld"
    """

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        endpoint: str = DEFAULT_DICTIONARY_ENDPOINT,
    ):
        """
        Args:
            transport: 共有 HTTP トランスポート（None なら専用に生成）
            endpoint: 辞書 API のベース URL（末尾に単語を付けて呼び出す）
        """
        self.transport = transport or HttpTransport()
        self.endpoint = endpoint.rstrip("/")
        self._cache: Dict[str, str] = {}

    async def get_phonetic(self, text: str, lang: str = "en") -> str:
        """
        テキストの発音表記を取得

        1語ならその単語の表記、2〜10語なら単語ごとに並行取得して空白で連結、
        それ以上の語数やベトナム語は空文字を返す。

        Args:
            text: 対象テキスト
            lang: 言語コード

        Returns:
            発音表記（取得できなければ空文字）
        """
        if is_language(lang, VIETNAMESE) or not text:
            return ""

        words = text.split()
        if not words or len(words) > MAX_PHRASE_WORDS:
            return ""
        if len(words) == 1:
            return await self.get_word_phonetic(words[0])

        phonetics = await asyncio.gather(*(self.get_word_phonetic(word) for word in words))
        return " ".join(p for p in phonetics if p)

    async def get_word_phonetic(self, word: str) -> str:
        """
        1単語の発音表記を取得

        成功した応答（表記が空でも）はキャッシュする。
        HTTP エラー・通信失敗はキャッシュせず空文字を返す。
        """
        clean = normalize_word(word)
        if not clean:
            return ""
        if clean in self._cache:
            return self._cache[clean]

        url = f"{self.endpoint}/{quote(clean)}"
        try:
            response = await self.transport.get_client().get(url)
        except httpx.HTTPError as e:
            logger.debug("Phonetic fetch failed for %r: %s", clean, e)
            return ""
        if not response.is_success:
            logger.debug("Phonetic lookup for %r returned %d", clean, response.status_code)
            return ""
        try:
            data = response.json()
        except ValueError:
            logger.debug("Phonetic lookup for %r returned non-JSON body", clean)
            return ""

        phonetic = extract_phonetic(data)
        self._cache[clean] = phonetic
        return phonetic

    def clear_cache(self) -> None:
        """キャッシュを破棄"""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)
