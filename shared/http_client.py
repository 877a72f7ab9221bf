"""
HTTP client utilities for fetching uploaded deck files.
"""

import asyncio
from typing import Any

import aiohttp


class FetchedFile:
    """Bytes of a downloaded file plus the content type the server reported."""

    def __init__(self, data: bytes, content_type: str = "") -> None:
        self.data = data
        self.content_type = content_type

    def __repr__(self) -> str:
        return f"<FetchedFile(size={len(self.data)}, content_type={self.content_type!r})>"


class AsyncHTTPClient:
    """Async HTTP client used for the deck download step."""

    def __init__(self, timeout: int = 30) -> None:
        """Initialize HTTP client."""
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        """Enter async context manager."""
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        if self.session:
            await self.session.close()

    @staticmethod
    async def _prepare_request(coro_or_ctx: Any) -> Any:
        """Normalize aiohttp request result to an async context manager."""
        if asyncio.iscoroutine(coro_or_ctx):
            return await coro_or_ctx
        return coro_or_ctx

    @staticmethod
    async def _ensure_response_ok(response: Any) -> None:
        """Invoke raise_for_status, awaiting when necessary."""
        result = response.raise_for_status()
        if asyncio.iscoroutine(result):
            await result

    async def get_bytes(self, url: str, headers: dict[str, Any] | None = None) -> FetchedFile:
        """Download url and return its raw body."""
        if not self.session:
            raise RuntimeError("HTTP client not initialized. Use async context manager.")

        request_ctx = await self._prepare_request(self.session.get(url, headers=headers))
        async with request_ctx as response:
            await self._ensure_response_ok(response)
            data = await response.read()
            return FetchedFile(data=data, content_type=response.headers.get("Content-Type", ""))


async def fetch_deck(url: str, timeout: int = 30) -> FetchedFile:
    """Fetch a deck file in a single short-lived session.

    Raises:
        aiohttp.ClientError: On connection problems or non-2xx responses
        asyncio.TimeoutError: When the download exceeds ``timeout`` seconds
    """
    async with AsyncHTTPClient(timeout=timeout) as client:
        return await client.get_bytes(url)
