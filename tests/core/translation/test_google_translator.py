"""
GoogleTranslator のテスト
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from popup_translate.translation.classifier import ErrorKind
from popup_translate.translation.exceptions import InvalidTranslationRequest, TranslationError
from popup_translate.translation.impl.google import DEFAULT_ENDPOINT, GoogleTranslator


def make_phonetic_service(value: str = ""):
    service = MagicMock()
    service.get_phonetic = AsyncMock(return_value=value)
    return service


class TestGoogleTranslatorBasic:
    """GoogleTranslator の基本テスト"""

    def test_initialization(self):
        translator = GoogleTranslator()
        assert translator.get_translator_name() == "google"
        assert translator.endpoint == DEFAULT_ENDPOINT

    def test_from_config(self):
        translator = GoogleTranslator.from_config(
            {"endpoints": {"google": "http://google.test/single"}}
        )
        assert translator.endpoint == "http://google.test/single"


class TestGoogleTranslatorMocked:
    """MockTransport を使用した GoogleTranslator テスト"""

    @pytest.mark.asyncio
    async def test_hello_auto_to_vietnamese(self, make_transport):
        """hello (auto→vi) → xin chào、検出言語 en、ターゲット発音なし"""
        transport, recorder = make_transport(
            lambda request: httpx.Response(
                200,
                json=[[["xin chào", "hello", None, None]], None, "en"],
            )
        )
        service = make_phonetic_service("həˈləʊ")
        translator = GoogleTranslator(transport=transport, phonetic_service=service)

        result = await translator.translate("hello", "auto", "vi")

        assert result.translation == "xin chào"
        assert result.detected_lang == "en"
        assert result.target_phonetic is None
        assert result.src_phonetic == "həˈləʊ"

        params = recorder.requests[0].url.params
        assert params["client"] == "gtx"
        assert params["sl"] == "auto"
        assert params["tl"] == "vi"
        assert params["q"] == "hello"
        assert params.get_list("dt") == ["t", "rm"]

    @pytest.mark.asyncio
    async def test_segments_are_concatenated(self, make_transport):
        transport, _ = make_transport(
            lambda request: httpx.Response(
                200,
                json=[
                    [
                        ["Xin chào. ", "Hello. ", None, None],
                        ["Bạn khỏe không?", "How are you?", None, None],
                        [None, None, "sin chao", "həˈləʊ"],
                    ],
                    None,
                    "en",
                ],
            )
        )
        translator = GoogleTranslator(transport=transport)

        result = await translator.translate("Hello. How are you?", "en", "ja")

        assert result.translation == "Xin chào. Bạn khỏe không?"
        assert result.src_phonetic == "həˈləʊ"
        assert result.target_phonetic == "sin chao"
        # ソース言語が auto でなければ検出言語は設定しない
        assert result.detected_lang is None

    @pytest.mark.asyncio
    async def test_japanese_target_phonetic(self, make_transport):
        transport, _ = make_transport(
            lambda request: httpx.Response(
                200,
                json=[[["ありがとう", "thank you", None, None], [None, None, "Arigatō", None]], None, "en"],
            )
        )
        translator = GoogleTranslator(transport=transport)

        result = await translator.translate("thank you", "en", "ja")

        assert result.translation == "ありがとう"
        assert result.target_phonetic == "Arigatō"

    @pytest.mark.asyncio
    async def test_rate_limit(self, make_transport):
        """429 はレート制限（フォールバック可）"""
        transport, _ = make_transport(lambda request: httpx.Response(429, text="Too Many Requests"))
        translator = GoogleTranslator(transport=transport)

        with pytest.raises(TranslationError) as exc_info:
            await translator.translate("hello", "auto", "vi")
        assert exc_info.value.kind == ErrorKind.RATE_LIMIT
        assert exc_info.value.should_fallback is True
        assert exc_info.value.service_id == "google"

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, make_transport):
        transport, _ = make_transport(lambda request: httpx.Response(200, json={"oops": True}))
        translator = GoogleTranslator(transport=transport)

        with pytest.raises(TranslationError) as exc_info:
            await translator.translate("hello", "auto", "vi")
        assert exc_info.value.kind == ErrorKind.UNKNOWN

    @pytest.mark.asyncio
    async def test_empty_text_raises_before_request(self, make_transport):
        transport, recorder = make_transport(lambda request: httpx.Response(200, json=[]))
        translator = GoogleTranslator(transport=transport)

        with pytest.raises(InvalidTranslationRequest):
            await translator.translate("   ", "auto", "vi")
        assert recorder.call_count == 0
