"""
Error types raised by lark_requests.

Every failure a caller can observe at call time is a LarkError carrying a
numeric code and a message, rendered as ``[code]: message``. The subclasses keep
the categories apart so callers can tell an unreachable host from a bad
payload or an API-level rejection.

RequestDefinitionError is different: it is raised while a request class is
being defined (i.e. at import time) and means the class itself is wrong.

Lark error codes are documented at:
https://open.feishu.cn/document/ukTMukTMukTM/ugjM14COyUjL4ITN
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
import requests


class RequestDefinitionError(TypeError):
    """Raised by @request when a request class is declared incorrectly."""


class LarkError(Exception):
    def __init__(self, code: int, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.payload = payload

    def __str__(self) -> str:
        return f"[{self.code}]: {self.message}"

    @classmethod
    def from_response(cls, response: Any, **kwargs: Any) -> "LarkError":
        """Build an error from a decoded envelope (anything with code and message)."""
        return cls(response.code, response.message, **kwargs)


class InvalidAddressError(LarkError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(502, message, payload=payload)


class SerializationError(LarkError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(500, f"serialize error: {message}", payload=payload)


class ResponseDecodeError(LarkError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(500, f"json serde error: {message}", payload=payload)


class MissingDataError(LarkError):
    def __init__(self, message: str = "response data is null", *, payload: Optional[Any] = None) -> None:
        super().__init__(502, message, payload=payload)


class ApiError(LarkError):
    """The API answered with a non-zero code."""

    def __init__(
        self,
        code: int,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Optional[Any] = None,
    ) -> None:
        super().__init__(code, message, payload=payload)
        self.status_code = status_code


class TransportError(LarkError):
    """The HTTP exchange itself failed (connection, timeout, status, ...)."""

    @classmethod
    def from_requests(cls, err: requests.RequestException) -> "TransportError":
        if isinstance(err, requests.Timeout):
            return cls(500, f"timeout error: {err}")
        if isinstance(err, requests.ConnectionError):
            return cls(500, f"connect error: {err}")
        if isinstance(err, requests.HTTPError) and err.response is not None:
            return HttpStatusError(err.response.status_code, f"status error: {err}")
        return cls(500, f"unknown error: {err}")

    @classmethod
    def from_httpx(cls, err: httpx.HTTPError) -> "TransportError":
        if isinstance(err, httpx.TimeoutException):
            return cls(500, f"timeout error: {err}")
        if isinstance(err, httpx.ConnectError):
            return cls(500, f"connect error: {err}")
        if isinstance(err, httpx.HTTPStatusError):
            return HttpStatusError(err.response.status_code, f"status error: {err}")
        return cls(500, f"unknown error: {err}")


class HttpStatusError(TransportError):
    def __init__(self, status_code: int, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(status_code, message, payload=payload)
        self.status_code = status_code
