"""
TranslationController のテスト

フォールバック・エラー表示・世代番号を MockTransport 経由で確認する。
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from popup_translate.controller import TranslationController
from popup_translate.speech import NullSpeechBackend, SpeechService
from popup_translate.translation.classifier import (
    ErrorClassification,
    ErrorClassifier,
    ErrorKind,
)
from popup_translate.translation.exceptions import (
    AllServicesFailedError,
    InvalidTranslationRequest,
    TranslationError,
)
from popup_translate.translation.result import TranslationRequest, TranslationResult

GOOGLE_HOST = "translate.googleapis.com"
GEMINI_HOST = "generativelanguage.googleapis.com"


def google_reply(text: str, detected: str = "en") -> httpx.Response:
    return httpx.Response(200, json=[[[text, "source", None, None]], None, detected])


def route(google=None, gemini=None):
    """ホストごとに応答を振り分けるハンドラ（辞書 API は常に 404）"""

    def handler(request: httpx.Request) -> httpx.Response:
        host = request.url.host
        if host == GOOGLE_HOST and google is not None:
            return google(request)
        if host == GEMINI_HOST and gemini is not None:
            return gemini(request)
        return httpx.Response(404, json={"title": "No Definitions Found"})

    return handler


def hosts(recorder):
    return [request.url.host for request in recorder.requests]


def make_controller(transport, **config):
    base = {"api_keys": {"gemini": "AIza-test"}}
    base.update(config)
    return TranslationController(base, transport=transport)


class TestTranslate:
    """正常系"""

    @pytest.mark.asyncio
    async def test_primary_success(self, make_transport):
        transport, recorder = make_transport(
            route(google=lambda request: google_reply("xin chào"))
        )
        controller = make_controller(transport)

        result = await controller.translate(TranslationRequest("hello", "auto", "vi"))

        assert result.translation == "xin chào"
        assert result.detected_lang == "en"
        assert result.service_id == "google"
        assert result.fallback_notice is None
        assert result.generation == 1
        assert GOOGLE_HOST in hosts(recorder)

    @pytest.mark.asyncio
    async def test_translate_text_uses_config_defaults(self, make_transport):
        transport, recorder = make_transport(
            route(google=lambda request: google_reply("Bonjour"))
        )
        controller = make_controller(
            transport, translation={"target_lang": "fr", "source_lang": "en"}
        )

        result = await controller.translate_text("hello")

        assert result.translation == "Bonjour"
        google_request = next(r for r in recorder.requests if r.url.host == GOOGLE_HOST)
        assert google_request.url.params["sl"] == "en"
        assert google_request.url.params["tl"] == "fr"

    @pytest.mark.asyncio
    async def test_invalid_request_propagates(self):
        """InvalidTranslationRequest はフォールバックせずに送出"""
        controller = TranslationController(factory=MagicMock())
        translator = MagicMock()
        translator.translate = AsyncMock(side_effect=InvalidTranslationRequest("bad"))
        controller.factory.get_translator.return_value = translator

        with pytest.raises(InvalidTranslationRequest):
            await controller.translate(TranslationRequest("hello", "auto", "vi"))
        assert controller.factory.get_translator.call_count == 1


class TestFallback:
    """既定サービスへのフォールバック"""

    @pytest.mark.asyncio
    async def test_server_error_falls_back_with_notice(self, make_transport):
        """Gemini 500 → Google にフォールバックし通知を付ける"""
        transport, recorder = make_transport(
            route(
                gemini=lambda request: httpx.Response(
                    500, json={"error": {"message": "Internal error encountered."}}
                ),
                google=lambda request: google_reply("xin chào"),
            )
        )
        controller = make_controller(transport)

        result = await controller.translate(
            TranslationRequest("hello", "en", "vi", service_id="gemini")
        )

        assert result.translation == "xin chào"
        assert result.service_id == "google"
        assert "Internal error encountered." in result.fallback_notice
        assert result.fallback_notice == (
            "API limit/error: Service error. Please try again later.: Internal error encountered.\n"
            "Switched to Google Translate."
        )
        assert hosts(recorder).count(GEMINI_HOST) == 1
        assert hosts(recorder).count(GOOGLE_HOST) == 1

    @pytest.mark.asyncio
    async def test_notice_in_vietnamese(self, make_transport):
        transport, _ = make_transport(
            route(
                gemini=lambda request: httpx.Response(429, json={}),
                google=lambda request: google_reply("xin chào"),
            )
        )
        controller = make_controller(transport)

        result = await controller.translate(
            TranslationRequest("hello", "en", "vi", service_id="gemini", ui_language="vi")
        )

        assert result.fallback_notice.startswith("Lỗi API: Quá giới hạn lượt gọi")
        assert result.fallback_notice.endswith("Đã tự động chuyển sang Google Dịch.")

    @pytest.mark.asyncio
    async def test_network_error_falls_back(self, make_transport):
        def gemini(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport, _ = make_transport(
            route(gemini=gemini, google=lambda request: google_reply("xin chào"))
        )
        controller = make_controller(transport)

        result = await controller.translate(
            TranslationRequest("hello", "en", "vi", service_id="gemini")
        )

        assert result.service_id == "google"
        assert "Network error" in result.fallback_notice

    @pytest.mark.parametrize(
        "response, kind",
        [
            (
                httpx.Response(400, json={"error": {"message": "API key not valid."}}),
                ErrorKind.API_KEY_INVALID,
            ),
            (
                httpx.Response(401, json={"error": {"message": "API key not valid"}}),
                ErrorKind.API_KEY_INVALID,
            ),
            (
                httpx.Response(403, json={"error": {"message": "Quota exceeded for project"}}),
                ErrorKind.QUOTA_EXCEEDED,
            ),
        ],
    )
    @pytest.mark.asyncio
    async def test_no_fallback_for_account_errors(self, make_transport, response, kind):
        """キー不正・クォータ超過はフォールバックしない"""
        transport, recorder = make_transport(
            route(
                gemini=lambda request: response,
                google=lambda request: google_reply("xin chào"),
            )
        )
        controller = make_controller(transport)

        with pytest.raises(TranslationError) as exc_info:
            await controller.translate(
                TranslationRequest("hello", "en", "vi", service_id="gemini")
            )

        assert exc_info.value.kind == kind
        assert GOOGLE_HOST not in hosts(recorder)

    @pytest.mark.asyncio
    async def test_missing_key_does_not_fall_back(self, make_transport):
        transport, recorder = make_transport(
            route(google=lambda request: google_reply("xin chào"))
        )
        controller = TranslationController(transport=transport)

        with pytest.raises(TranslationError) as exc_info:
            await controller.translate(
                TranslationRequest("hello", "en", "vi", service_id="gemini")
            )

        assert exc_info.value.kind == ErrorKind.API_KEY_MISSING
        assert recorder.call_count == 0

    @pytest.mark.asyncio
    async def test_all_services_failed(self, make_transport):
        transport, _ = make_transport(
            route(
                gemini=lambda request: httpx.Response(500, json={}),
                google=lambda request: httpx.Response(503, text="Service Unavailable"),
            )
        )
        controller = make_controller(transport)

        with pytest.raises(AllServicesFailedError) as exc_info:
            await controller.translate(
                TranslationRequest("hello", "en", "vi", service_id="gemini")
            )

        error = exc_info.value
        assert str(error) == "All translation services failed"
        assert error.should_fallback is False
        assert error.primary_error.kind == ErrorKind.SERVER_ERROR
        assert error.fallback_error.kind == ErrorKind.SERVER_ERROR

    @pytest.mark.asyncio
    async def test_google_primary_falls_back_once(self, make_transport):
        """Google 自身の失敗でもフォールバックは1回だけ"""
        transport, recorder = make_transport(
            route(google=lambda request: httpx.Response(500, json={}))
        )
        controller = make_controller(transport)

        with pytest.raises(AllServicesFailedError):
            await controller.translate(TranslationRequest("hello", "en", "vi"))

        assert hosts(recorder).count(GOOGLE_HOST) == 2


class TestGeneration:
    """古い結果の判定"""

    @pytest.mark.asyncio
    async def test_only_latest_result_is_current(self, make_transport):
        transport, _ = make_transport(
            route(google=lambda request: google_reply("xin chào"))
        )
        controller = make_controller(transport)

        first = await controller.translate(TranslationRequest("hello", "en", "vi"))
        second = await controller.translate(TranslationRequest("world", "en", "vi"))

        assert controller.current_generation == 2
        assert controller.is_latest(second) is True
        assert controller.is_latest(first) is False
        assert controller.is_latest(TranslationResult("x")) is False


class TestDescribeError:
    """エラー表示文字列"""

    def setup_method(self):
        self.controller = TranslationController()

    def test_known_kind_uses_table(self):
        error = TranslationError("429", classification=ErrorClassification.for_kind(ErrorKind.RATE_LIMIT))
        assert self.controller.describe_error(error) == "Rate limit exceeded. Please try again later.: 429"
        assert self.controller.describe_error(error, "vi").startswith("Quá giới hạn")

    def test_unknown_appends_message(self):
        error = TranslationError("Model reply contained no text", classification=ErrorClassifier.unknown())
        assert self.controller.describe_error(error) == (
            "Unknown error occurred: Model reply contained no text"
        )

    def test_plain_exception_is_unknown(self):
        assert self.controller.describe_error(RuntimeError("oops")) == "Unknown error occurred: oops"

    def test_all_services_failed(self):
        error = AllServicesFailedError(RuntimeError("a"), RuntimeError("b"))
        assert self.controller.describe_error(error, "vi") == "Tất cả dịch vụ dịch đều thất bại"

    def test_invalid_request(self):
        error = InvalidTranslationRequest("Text must be a non-empty string")
        assert self.controller.describe_error(error) == (
            "Invalid translation request: Text must be a non-empty string"
        )

    def test_service_display_name(self):
        assert self.controller.service_display_name("gemini") == "Gemini AI"
        assert self.controller.service_display_name("google", "vi") == "Google Dịch"


class TestControllerMisc:
    def test_update_config_changes_dictionary_endpoint(self):
        controller = TranslationController()
        controller.update_config({"endpoints": {"dictionary": "http://dict.test/en/"}})
        assert controller.phonetic_service.endpoint == "http://dict.test/en"

    def test_update_config_changes_timeout(self):
        """タイムアウトの変更は生成済みのクライアントにも反映"""
        controller = TranslationController()
        client = controller.transport.get_client()

        controller.update_config({"network": {"timeout": 2}})

        assert controller.transport.timeout == 2
        assert client.timeout.read == 2
        assert controller.transport.get_client() is client

    def test_update_config_keeps_injected_transport_timeout(self, make_transport):
        transport, _ = make_transport(lambda request: httpx.Response(200, json=[]))
        transport.timeout = 15.0
        controller = TranslationController(transport=transport)

        controller.update_config({"network": {"timeout": 2}})

        assert controller.transport.timeout == 15.0

    def test_update_config_rebuilds_translators(self):
        controller = TranslationController()
        before = controller.factory.get_translator("gemini")
        controller.update_config({"api_keys": {"gemini": "AI-new"}})
        after = controller.factory.get_translator("gemini")
        assert after is not before
        assert after.api_key == "AI-new"

    def test_speak_and_stop(self):
        backend = NullSpeechBackend()
        backend.cancel = MagicMock()
        controller = TranslationController(speech=SpeechService(backend))

        controller.speak("xin chào", "vi")
        controller.stop_speech()

        assert [u.text for u in backend.spoken] == ["xin chào"]
        assert backend.spoken[0].lang == "vi"
        assert backend.cancel.call_count == 2

    @pytest.mark.asyncio
    async def test_context_manager_closes_owned_transport(self):
        async with TranslationController() as controller:
            client = controller.transport.get_client()
        assert client.is_closed
