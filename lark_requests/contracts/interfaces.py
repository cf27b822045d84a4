from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from lark_requests.params import check_request_fields


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class HttpMethod(str, Enum):
    OPTIONS = "OPTIONS"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    TRACE = "TRACE"
    HEAD = "HEAD"


# ---------------------------------------------------------------------------
# Abstract request interface
# ---------------------------------------------------------------------------

class Request(BaseModel, ABC):
    """
    Every request sent through a lark_requests client implements this interface.

    Subclasses are plain pydantic models describing one API call. Either
    implement the methods by hand or let @request generate them:

        class GetTenantAccessTokenRequest(Request):
            response_type = FlattenResponse[TenantAccessToken]

            app_id: str
            app_secret: str

            def address(self) -> str:
                return "https://open.feishu.cn/open-apis/auth/v3/tenant_access_token/internal"

            def body(self) -> Optional[bytes]:
                return self.model_dump_json().encode("utf-8")

    Instances are frozen. A field may not reuse the name of an interface
    method; that and conflicting Header/Path/Query markers raise
    RequestDefinitionError when the subclass is defined.
    """

    model_config = ConfigDict(frozen=True)

    # Type the raw response bytes decode into.
    response_type: ClassVar[Any] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        check_request_fields(cls)

    def method(self) -> HttpMethod:
        return HttpMethod.POST

    @abstractmethod
    def address(self) -> str:
        """Absolute URL, or a path starting with '/' resolved against the client's base URL."""

    def path_params(self) -> Optional[Dict[str, str]]:
        """Values for the :name / {name} placeholders in the address."""
        return None

    def query_params(self) -> Optional[List[Tuple[str, str]]]:
        return None

    def headers(self) -> Optional[List[Tuple[str, str]]]:
        return None

    def body(self) -> Optional[bytes]:
        """JSON payload, or None for bodyless calls."""
        return None
