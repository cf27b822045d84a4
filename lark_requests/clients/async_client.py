"""
Async HTTP client built on httpx.

    async with AsyncClient() as client:
        token = await client.execute(GetTenantAccessTokenRequest(app_id=..., app_secret=...))
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from lark_requests.clients.base import build_call, read_response
from lark_requests.config import get_settings
from lark_requests.contracts.interfaces import Request
from lark_requests.errors import TransportError

logger = logging.getLogger(__name__)


class AsyncClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        connect_timeout: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.connect_timeout = settings.connect_timeout if connect_timeout is None else connect_timeout
        self.timeout = settings.timeout if timeout is None else timeout
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            transport=transport,
        )

    async def execute(self, req: Request) -> Any:
        """Send req and return the decoded response data."""
        call = build_call(req, self.base_url)
        logger.debug("Sending %s %s", call.method.value, call.url)

        try:
            response = await self._client.request(
                call.method.value,
                call.url,
                headers=call.headers,
                content=call.body,
            )
        except httpx.HTTPError as exc:
            logger.error(f"Request to {call.url} failed: {exc}")
            raise TransportError.from_httpx(exc) from exc

        logger.debug("Received %s from %s", response.status_code, call.url)
        return read_response(call.response_type, response.status_code, response.content)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
