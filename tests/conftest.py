"""
共通フィクスチャ

httpx.MockTransport を差し込んだ HttpTransport でワイヤレベルのテストを行う。
"""

from __future__ import annotations

import json
from typing import Callable, List

import httpx
import pytest

from popup_translate.translation.transport import HttpTransport


class RecordingHandler:
    """受け取ったリクエストを記録し、ハンドラ関数の応答を返す"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def json_body(self, index: int = -1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_transport():
    """ハンドラ関数から (HttpTransport, RecordingHandler) を作る"""

    def _make(handler: Callable[[httpx.Request], httpx.Response]):
        recorder = RecordingHandler(handler)
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        return HttpTransport(client=client), recorder

    return _make

