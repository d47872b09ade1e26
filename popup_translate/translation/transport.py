"""
HTTP トランスポート

全アダプタと PhoneticService が共有する httpx.AsyncClient を遅延生成で保持する。
ProxyFetcher はホスト側のクロスオリジン中継（拡張機能のバックグラウンド等）の
境界で、HTTP・通信エラーでも例外を送出せずエンベロープで結果を返す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class HttpTransport:
    """共有 HTTP クライアントの保持者"""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            client: 注入するクライアント（テストで MockTransport を使う場合など）
        """
        self.timeout = timeout
        self._client = client

    def get_client(self) -> httpx.AsyncClient:
        """クライアントを取得（未生成なら生成）"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                timeout=httpx.Timeout(self.timeout),
            )
        return self._client

    def set_timeout(self, timeout: float) -> None:
        """タイムアウトを変更（生成済みのクライアントにも反映）"""
        self.timeout = timeout
        if self._client is not None:
            self._client.timeout = httpx.Timeout(timeout)

    async def aclose(self) -> None:
        """クライアントを閉じる"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


@dataclass
class ProxyResponse:
    """
    中継フェッチの結果エンベロープ

    error=True の場合、status は受信できたときのみ設定される。
    """

    error: bool
    status: Optional[int] = None
    data: Any = None
    message: Optional[str] = None


class ProxyFetcher(Protocol):
    """ホスト側の中継フェッチ"""

    async def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
    ) -> ProxyResponse:
        ...


class HttpxProxyFetcher:
    """HttpTransport を使って直接リクエストする既定の ProxyFetcher"""

    def __init__(self, transport: HttpTransport):
        self._transport = transport

    async def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        json: Any = None,
    ) -> ProxyResponse:
        client = self._transport.get_client()
        try:
            response = await client.request(method, url, headers=headers, json=json)
        except httpx.HTTPError as e:
            logger.debug("Proxy fetch to %s failed: %s", url, e)
            return ProxyResponse(error=True, message=str(e) or type(e).__name__)

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_success:
            if data is None:
                return ProxyResponse(
                    error=True,
                    status=response.status_code,
                    message="Response is not valid JSON",
                )
            return ProxyResponse(error=False, status=response.status_code, data=data)

        return ProxyResponse(
            error=True,
            status=response.status_code,
            data=data,
            message=response.reason_phrase,
        )
