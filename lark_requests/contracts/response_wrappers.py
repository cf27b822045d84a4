"""
Response envelopes.

Lark answers with one of two JSON shapes. Most endpoints nest the payload
under `data`:

    {"code": 0, "msg": "ok", "data": {"chat_id": "oc_xxx"}}

while a few (the auth endpoints among them) put the payload fields next to
`code` and `msg`:

    {"code": 0, "msg": "ok", "tenant_access_token": "t-xxx", "expire": 7200}

BodyResponse[T] decodes the first shape, FlattenResponse[T] the second, and
RawResponse[T] passes the whole document through as T.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from lark_requests.errors import ResponseDecodeError

T = TypeVar("T")

_ENVELOPE_KEYS = ("code", "msg")


class Body(BaseModel):
    """Base class for the data carried by a response."""


class ApiResponse(BaseModel, Generic[T]):
    code: int
    message: str = Field(alias="msg")
    data: Optional[T] = None

    model_config = ConfigDict(populate_by_name=True)

    def is_success(self) -> bool:
        return self.code == 0


class BodyResponse(ApiResponse[T], Generic[T]):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _skip_error_data(cls, value: Any) -> Any:
        # Error envelopes still carry "data": {} which would not match T.
        if isinstance(value, dict) and value.get("code") != 0 and "data" in value:
            value = {k: v for k, v in value.items() if k != "data"}
        return value


class FlattenResponse(ApiResponse[T], Generic[T]):
    code: int = 0
    message: str = Field(default="", alias="msg")

    @model_validator(mode="before")
    @classmethod
    def _collect_flat_fields(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        envelope: Dict[str, Any] = {k: value[k] for k in _ENVELOPE_KEYS if k in value}
        if envelope.get("code", 0) == 0:
            envelope["data"] = {k: v for k, v in value.items() if k not in _ENVELOPE_KEYS}
        return envelope


class RawResponse(ApiResponse[T], Generic[T]):
    code: int = 0
    message: str = Field(default="", alias="msg")

    @model_validator(mode="before")
    @classmethod
    def _wrap_payload(cls, value: Any) -> Any:
        return {"code": 0, "msg": "", "data": value}


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def decode_response(response_type: Any, content: bytes) -> Any:
    """
    Decode raw response bytes into response_type.

    Raises ResponseDecodeError when the bytes are not JSON or do not match the
    expected shape; nothing is defaulted.
    """
    try:
        return _adapter(response_type).validate_json(content)
    except ValidationError as exc:
        raise ResponseDecodeError(str(exc), payload=content) from exc
