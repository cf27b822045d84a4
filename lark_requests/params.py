"""
Request fields that travel outside the JSON body.

A field of a @request model can be routed to a header, a path placeholder or a
query parameter by annotating it with one of the markers below:

    @request(GET, "https://open.feishu.cn/open-apis/im/v1/chats/:chat_id")
    class GetChatRequest(BaseModel):
        token: Annotated[str, Header("Authorization", with_="Bearer ")]
        chat_id: Annotated[str, Path()]
        user_id_type: Annotated[Optional[str], Query()] = None

Marked fields are left out of the body. Values are turned into strings with
serialize_param; a value that serializes to None is omitted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import singledispatch
from typing import Any, Callable, Dict, List, Optional

from lark_requests.errors import RequestDefinitionError


class ParamMode(str, Enum):
    HEADER = "header"
    PATH = "path"
    QUERY = "query"


@dataclass(frozen=True)
class RequestParam:
    mode: ParamMode
    rename: Optional[str] = None
    with_: Optional[str] = None
    serialize_with: Optional[Callable[[Any], Optional[str]]] = None


def Header(
    rename: Optional[str] = None,
    *,
    with_: Optional[str] = None,
    serialize_with: Optional[Callable[[Any], Optional[str]]] = None,
) -> RequestParam:
    return RequestParam(ParamMode.HEADER, rename, with_, serialize_with)


def Path(
    rename: Optional[str] = None,
    *,
    with_: Optional[str] = None,
    serialize_with: Optional[Callable[[Any], Optional[str]]] = None,
) -> RequestParam:
    return RequestParam(ParamMode.PATH, rename, with_, serialize_with)


def Query(
    rename: Optional[str] = None,
    *,
    with_: Optional[str] = None,
    serialize_with: Optional[Callable[[Any], Optional[str]]] = None,
) -> RequestParam:
    return RequestParam(ParamMode.QUERY, rename, with_, serialize_with)


@dataclass(frozen=True)
class BoundParam:
    """A marker attached to a concrete model field."""

    field: str
    param: RequestParam

    @property
    def name(self) -> str:
        return self.param.rename or self.field

    def render(self, instance: Any) -> Optional[str]:
        value = getattr(instance, self.field)
        serialize = self.param.serialize_with or serialize_param
        text = serialize(value)
        if text is None:
            return None
        if self.param.with_:
            return f"{self.param.with_}{text}"
        return text


# Names a request field may not take: they belong to the Request interface.
CONTRACT_NAMES = ("method", "address", "body", "path_params", "query_params", "headers", "response_type")


def collect_params(cls: type) -> List[BoundParam]:
    """Bound markers of a pydantic model class, in field order."""
    bound: List[BoundParam] = []
    for name, field in cls.model_fields.items():
        markers = [m for m in field.metadata if isinstance(m, RequestParam)]
        if len(markers) > 1:
            raise RequestDefinitionError(f"duplicate request parameter marker on field {name!r}")
        if markers:
            bound.append(BoundParam(name, markers[0]))
    return bound


def check_request_fields(cls: type) -> List[BoundParam]:
    shadowed = [name for name in cls.model_fields if name in CONTRACT_NAMES]
    if shadowed:
        raise RequestDefinitionError(
            f"field {shadowed[0]!r} of {cls.__qualname__} clashes with Request.{shadowed[0]}"
        )
    return collect_params(cls)


# ---------------------------------------------------------------------------
# Value serialization
# ---------------------------------------------------------------------------

@singledispatch
def serialize_param(value: Any) -> Optional[str]:
    raise TypeError(f"cannot serialize {type(value).__name__} as a request parameter")


@serialize_param.register(type(None))
def _(value: None) -> Optional[str]:
    return None


@serialize_param.register(str)
def _(value: str) -> Optional[str]:
    if isinstance(value, Enum):
        return serialize_param(value.value)
    return value


@serialize_param.register(bool)
def _(value: bool) -> Optional[str]:
    return "true" if value else "false"


@serialize_param.register(int)
@serialize_param.register(float)
def _(value: Any) -> Optional[str]:
    if isinstance(value, Enum):
        return serialize_param(value.value)
    return str(value)


@serialize_param.register(Enum)
def _(value: Enum) -> Optional[str]:
    return serialize_param(value.value)


@serialize_param.register(list)
@serialize_param.register(tuple)
def _(value: Any) -> Optional[str]:
    items = [serialize_param(item) for item in value]
    return ",".join(item for item in items if item is not None)


# ---------------------------------------------------------------------------
# Address templating
# ---------------------------------------------------------------------------

_PLACEHOLDER = re.compile(r":(\w+)|\{(\w+)\}")


def replace_path_params(path: str, params: Dict[str, str]) -> str:
    """Fill :name and {name} placeholders; unknown names are left as they are."""

    def _sub(match: "re.Match[str]") -> str:
        name = match.group(1) or match.group(2)
        value = params.get(name)
        return match.group(0) if value is None else value

    return _PLACEHOLDER.sub(_sub, path)
