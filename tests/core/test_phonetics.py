"""
PhoneticService のテスト
"""

from __future__ import annotations

import httpx
import pytest

from popup_translate.phonetics import (
    MAX_PHRASE_WORDS,
    PhoneticService,
    extract_phonetic,
    normalize_word,
)

IPA = {
    "hello": "/həˈləʊ/",
    "world": "/wɜːld/",
    "good": "[ɡʊd]",
}


def dictionary(request: httpx.Request) -> httpx.Response:
    word = request.url.path.rsplit("/", 1)[-1]
    if word in IPA:
        return httpx.Response(
            200,
            json=[{"word": word, "phonetics": [{"audio": ""}, {"text": IPA[word]}]}],
        )
    return httpx.Response(404, json={"title": "No Definitions Found"})


class TestHelpers:
    @pytest.mark.parametrize(
        "word, expected",
        [("Hello,", "hello"), ("(World)!", "world"), ("it's", "its"), ("...", "")],
    )
    def test_normalize_word(self, word, expected):
        assert normalize_word(word) == expected

    def test_extract_phonetic_strips_delimiters(self):
        data = [{"phonetics": [{"text": "/həˈləʊ/"}]}]
        assert extract_phonetic(data) == "həˈləʊ"

    def test_extract_phonetic_without_text(self):
        assert extract_phonetic([{"phonetics": [{"audio": "x.mp3"}]}]) == ""
        assert extract_phonetic({"title": "No Definitions Found"}) == ""
        assert extract_phonetic([]) == ""


class TestPhoneticService:
    """MockTransport を使用した PhoneticService テスト"""

    @pytest.mark.asyncio
    async def test_single_word(self, make_transport):
        transport, recorder = make_transport(dictionary)
        service = PhoneticService(transport)

        assert await service.get_phonetic("Hello!") == "həˈləʊ"
        assert str(recorder.requests[0].url).endswith("/entries/en/hello")

    @pytest.mark.asyncio
    async def test_phrase_joins_found_words(self, make_transport):
        """見つからない単語は省いて連結"""
        transport, recorder = make_transport(dictionary)
        service = PhoneticService(transport)

        result = await service.get_phonetic("hello big world")

        assert result == "həˈləʊ wɜːld"
        assert recorder.call_count == 3

    @pytest.mark.asyncio
    async def test_long_phrase_skips_lookup(self, make_transport):
        """11語以上は単語ごとの取得を行わない"""
        transport, recorder = make_transport(dictionary)
        service = PhoneticService(transport)

        text = " ".join(["hello"] * (MAX_PHRASE_WORDS + 1))
        assert await service.get_phonetic(text) == ""
        assert recorder.call_count == 0

    @pytest.mark.asyncio
    async def test_vietnamese_is_empty(self, make_transport):
        transport, recorder = make_transport(dictionary)
        service = PhoneticService(transport)

        assert await service.get_phonetic("xin chào", "vi") == ""
        assert await service.get_phonetic("") == ""
        assert recorder.call_count == 0

    @pytest.mark.asyncio
    async def test_cache_by_normalized_word(self, make_transport):
        transport, recorder = make_transport(dictionary)
        service = PhoneticService(transport)

        await service.get_phonetic("hello")
        await service.get_phonetic("Hello,")
        # 見つからない単語（空の表記）もキャッシュされる
        await service.get_phonetic("zzz")
        await service.get_phonetic("zzz")

        assert recorder.call_count == 3
        assert service.cache_size == 1

        service.clear_cache()
        assert service.cache_size == 0

    @pytest.mark.asyncio
    async def test_found_and_missing_are_cached(self, make_transport):
        def handler(request):
            return httpx.Response(200, json=[{"word": "qwerty", "phonetics": []}])

        transport, recorder = make_transport(handler)
        service = PhoneticService(transport)

        assert await service.get_phonetic("qwerty") == ""
        assert await service.get_phonetic("qwerty") == ""
        assert recorder.call_count == 1
        assert service.cache_size == 1

    @pytest.mark.asyncio
    async def test_network_failure_is_not_cached(self, make_transport):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        transport, recorder = make_transport(handler)
        service = PhoneticService(transport)

        assert await service.get_phonetic("hello") == ""
        assert await service.get_phonetic("hello") == ""
        assert recorder.call_count == 2
        assert service.cache_size == 0

    @pytest.mark.asyncio
    async def test_non_json_is_not_cached(self, make_transport):
        transport, _ = make_transport(lambda request: httpx.Response(200, text="<html>"))
        service = PhoneticService(transport)

        assert await service.get_word_phonetic("hello") == ""
        assert service.cache_size == 0

    def test_endpoint_trailing_slash(self):
        service = PhoneticService(endpoint="http://dict.test/en/")
        assert service.endpoint == "http://dict.test/en"
