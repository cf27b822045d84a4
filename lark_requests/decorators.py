"""
@request: derive the Request interface from a declaration.

    @request(HttpMethod.POST, "https://open.feishu.cn/open-apis/im/v1/messages", Message)
    class SendMessageRequest(BaseModel):
        receive_id: str
        msg_type: str
        content: str

The decorator runs when the class is defined. It checks its arguments, then
returns a subclass of the declared model that also derives from Request and
implements method(), address(), body(), path_params(), query_params(),
headers() and response_type. The subclass keeps the model's name and module and
is frozen like every Request. Mistakes in the declaration raise
RequestDefinitionError at import time; nothing is deferred to the first call.

Accepted forms:
    @request(METHOD, "url")
    @request(METHOD, "url", ResponseData)
    @request("url", ResponseData)                  # method defaults to POST
    @request(METHOD, "url", ResponseData, flatten=True, body=False)

METHOD is an HttpMethod member or its exact upper-case name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, get_origin

import httpx
from pydantic import BaseModel

from lark_requests.contracts.interfaces import HttpMethod, Request
from lark_requests.contracts.response_wrappers import BodyResponse, FlattenResponse, RawResponse
from lark_requests.errors import RequestDefinitionError, SerializationError
from lark_requests.params import ParamMode, check_request_fields, collect_params

logger = logging.getLogger(__name__)

REQUEST_ATTRIBUTE_ERROR = 'expected @request(METHOD, "url", RESPONSE_DATA) or @request("url", RESPONSE_DATA)'
ALLOW_METHODS = tuple(m.value for m in HttpMethod)
BODYLESS_METHODS = frozenset({HttpMethod.GET, HttpMethod.HEAD})
BOOL_OPTIONS = ("flatten", "body")


@dataclass(frozen=True)
class RequestVariable:
    method: HttpMethod
    address: str
    response: Any = None
    flatten: bool = False
    body: Optional[bool] = None

    def response_type(self) -> Any:
        if self.response is None:
            return RawResponse[Any]
        if self.flatten:
            return FlattenResponse[self.response]
        return BodyResponse[self.response]

    def has_body(self) -> bool:
        if self.body is not None:
            return self.body
        return self.method not in BODYLESS_METHODS


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _parse_method(arg: Any) -> Optional[HttpMethod]:
    if isinstance(arg, HttpMethod):
        return arg
    if isinstance(arg, str) and arg in ALLOW_METHODS:
        return HttpMethod(arg)
    return None


def _parse_address(arg: Any) -> Optional[str]:
    if not isinstance(arg, str) or not arg or arg != arg.strip():
        return None
    if arg.startswith("/"):
        return arg
    try:
        url = httpx.URL(arg)
    except httpx.InvalidURL:
        return None
    if url.scheme in ("http", "https") and url.host:
        return arg
    return None


def _parse_response(arg: Any) -> Any:
    if isinstance(arg, type) or get_origin(arg) is not None:
        return arg
    raise RequestDefinitionError(f"response data must be a type, got {arg!r}; {REQUEST_ATTRIBUTE_ERROR}")


def parse(args: Tuple[Any, ...], options: Dict[str, Any]) -> RequestVariable:
    remaining = list(args)
    if not remaining:
        raise RequestDefinitionError(REQUEST_ATTRIBUTE_ERROR)

    first = remaining.pop(0)
    method = _parse_method(first)
    if method is not None:
        if not remaining:
            raise RequestDefinitionError(f"missing url; {REQUEST_ATTRIBUTE_ERROR}")
        candidate = remaining.pop(0)
        address = _parse_address(candidate)
        if address is None:
            raise RequestDefinitionError(f"invalid url {candidate!r}; {REQUEST_ATTRIBUTE_ERROR}")
    else:
        address = _parse_address(first)
        if address is None:
            if isinstance(first, str) and "/" not in first:
                raise RequestDefinitionError(
                    f"unknown method {first!r}; expected one of {', '.join(ALLOW_METHODS)}"
                )
            raise RequestDefinitionError(f"invalid url {first!r}; {REQUEST_ATTRIBUTE_ERROR}")
        method = HttpMethod.POST

    response = _parse_response(remaining.pop(0)) if remaining else None
    if remaining:
        raise RequestDefinitionError(f"unexpected argument {remaining[0]!r}; {REQUEST_ATTRIBUTE_ERROR}")

    unknown = sorted(set(options) - set(BOOL_OPTIONS))
    if unknown:
        raise RequestDefinitionError(f"unknown option {unknown[0]!r}; {REQUEST_ATTRIBUTE_ERROR}")
    for name in BOOL_OPTIONS:
        if name in options and not isinstance(options[name], bool):
            raise RequestDefinitionError(f"invalid value for {name!r}: {options[name]!r}")

    return RequestVariable(
        method=method,
        address=address,
        response=response,
        flatten=options.get("flatten", False),
        body=options.get("body"),
    )


# ---------------------------------------------------------------------------
# Code generation
# ---------------------------------------------------------------------------

def _render(instance: Any, mode: ParamMode) -> Optional[List[Tuple[str, str]]]:
    # Markers are read from the instance's own class so subclasses can add fields.
    params = [p for p in collect_params(type(instance)) if p.param.mode is mode]
    if not params:
        return None
    items: List[Tuple[str, str]] = []
    for param in params:
        try:
            value = param.render(instance)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"field {param.field!r}: {exc}") from exc
        if value is not None:
            items.append((param.name, value))
    return items


def _build_methods(var: RequestVariable) -> Dict[str, Callable[..., Any]]:
    with_body = var.has_body()

    def method(self) -> HttpMethod:
        return var.method

    def address(self) -> str:
        return var.address

    def body(self) -> Optional[bytes]:
        if not with_body:
            return None
        excluded = {p.field for p in collect_params(type(self))} or None
        try:
            return self.model_dump_json(exclude=excluded, by_alias=True).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError(str(exc)) from exc

    def path_params(self) -> Optional[Dict[str, str]]:
        items = _render(self, ParamMode.PATH)
        return None if items is None else dict(items)

    def query_params(self) -> Optional[List[Tuple[str, str]]]:
        return _render(self, ParamMode.QUERY)

    def headers_(self) -> Optional[List[Tuple[str, str]]]:
        return _render(self, ParamMode.HEADER)

    return {
        "method": method,
        "address": address,
        "body": body,
        "path_params": path_params,
        "query_params": query_params,
        "headers": headers_,
    }


def request(*args: Any, **options: Any) -> Callable[[type], type]:
    var = parse(args, options)

    def decorator(cls: type) -> type:
        if not (isinstance(cls, type) and issubclass(cls, BaseModel)):
            raise RequestDefinitionError(f"@request only supports pydantic models, got {cls!r}")
        if "__lark_request__" in cls.__dict__:
            raise RequestDefinitionError(f"duplicate @request on {cls.__qualname__}")
        check_request_fields(cls)

        namespace: Dict[str, Any] = {
            "__module__": cls.__module__,
            "__qualname__": cls.__qualname__,
            "__doc__": cls.__doc__,
            "__lark_request__": var,
            "response_type": var.response_type(),
        }
        for name, fn in _build_methods(var).items():
            fn.__name__ = name
            fn.__qualname__ = f"{cls.__qualname__}.{name}"
            namespace[name] = fn

        # Plain models gain Request (and its frozen config) as a base.
        bases = (cls,) if issubclass(cls, Request) else (cls, Request)
        request_cls = type(cls.__name__, bases, namespace)

        logger.debug("Registered request %s: %s %s", cls.__qualname__, var.method.value, var.address)
        return request_cls

    return decorator
