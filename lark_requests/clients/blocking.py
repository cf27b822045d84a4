"""
Blocking HTTP client.

    client = Client()
    token = client.execute(GetTenantAccessTokenRequest(app_id=..., app_secret=...))
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import requests
from requests.structures import CaseInsensitiveDict

from lark_requests.clients.base import build_call, read_response
from lark_requests.config import get_settings
from lark_requests.contracts.interfaces import Request
from lark_requests.errors import TransportError

logger = logging.getLogger(__name__)


def fold_headers(headers: List[Tuple[str, str]]) -> CaseInsensitiveDict:
    """requests takes a mapping, so repeated header names are joined with ', '."""
    folded: CaseInsensitiveDict = CaseInsensitiveDict()
    for name, value in headers:
        folded[name] = f"{folded[name]}, {value}" if name in folded else value
    return folded


class Client:
    def __init__(
        self,
        base_url: Optional[str] = None,
        connect_timeout: Optional[float] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.connect_timeout = settings.connect_timeout if connect_timeout is None else connect_timeout
        self.timeout = settings.timeout if timeout is None else timeout
        self.session = session or requests.Session()

    def execute(self, req: Request) -> Any:
        """Send req and return the decoded response data."""
        call = build_call(req, self.base_url)
        logger.debug("Sending %s %s", call.method.value, call.url)

        try:
            response = self.session.request(
                call.method.value,
                str(call.url),
                headers=fold_headers(call.headers),
                data=call.body,
                timeout=(self.connect_timeout, self.timeout),
            )
        except requests.RequestException as exc:
            logger.error(f"Request to {call.url} failed: {exc}")
            raise TransportError.from_requests(exc) from exc

        logger.debug("Received %s from %s", response.status_code, call.url)
        return read_response(call.response_type, response.status_code, response.content)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
