"""
Shared request preparation and response interpretation for the clients.

build_call() turns a Request into the pieces of a wire request and
read_response() turns status + bytes back into the response data. The
blocking and async clients only differ in how they perform the exchange.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import httpx

from lark_requests.contracts.interfaces import HttpMethod, Request
from lark_requests.contracts.response_wrappers import ApiResponse, RawResponse, decode_response
from lark_requests.errors import (
    ApiError,
    HttpStatusError,
    InvalidAddressError,
    MissingDataError,
    ResponseDecodeError,
)
from lark_requests.params import replace_path_params

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass
class PreparedCall:
    method: HttpMethod
    url: httpx.URL
    response_type: Any
    # Header fields in order; a name may repeat.
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: Optional[bytes] = None


def resolve_address(address: str, base_url: Optional[str] = None) -> httpx.URL:
    if address.startswith("/"):
        if not base_url:
            raise InvalidAddressError(f"relative address {address!r} needs a client base_url")
        address = f"{base_url.rstrip('/')}{address}"
    try:
        url = httpx.URL(address)
    except httpx.InvalidURL as exc:
        raise InvalidAddressError(f"invalid address {address!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidAddressError(f"address {address!r} is not an absolute http(s) URL")
    return url


def build_call(request: Request, base_url: Optional[str] = None) -> PreparedCall:
    address = request.address()
    path_params = request.path_params()
    if path_params:
        address = replace_path_params(address, path_params)
    url = resolve_address(address, base_url)

    query_params = request.query_params()
    if query_params:
        url = url.copy_merge_params(query_params)

    headers = list(request.headers() or [])

    body = request.body()
    if body is not None and not any(name.lower() == "content-type" for name, _ in headers):
        headers.append(("Content-Type", JSON_CONTENT_TYPE))

    response_type = type(request).response_type or RawResponse[Any]
    return PreparedCall(
        method=HttpMethod(request.method()),
        url=url,
        response_type=response_type,
        headers=headers,
        body=body,
    )


def read_response(response_type: Any, status_code: int, content: bytes) -> Any:
    if status_code >= 400:
        try:
            decoded = decode_response(response_type, content)
        except ResponseDecodeError:
            logger.error("HTTP %s with undecodable body", status_code)
            raise HttpStatusError(status_code, f"status error: HTTP {status_code}", payload=content) from None
        if not isinstance(decoded, ApiResponse) or decoded.is_success():
            raise HttpStatusError(status_code, f"status error: HTTP {status_code}", payload=content)
        raise ApiError.from_response(decoded, status_code=status_code, payload=content)

    try:
        decoded = decode_response(response_type, content)
    except ResponseDecodeError:
        logger.error("Failed to decode response as %s", response_type)
        raise

    if not isinstance(decoded, ApiResponse):
        return decoded
    if not decoded.is_success():
        logger.warning("API returned code=%s msg=%s", decoded.code, decoded.message)
        raise ApiError.from_response(decoded, status_code=status_code, payload=content)
    if decoded.data is None and not isinstance(decoded, RawResponse):
        raise MissingDataError(payload=content)
    return decoded.data
