"""
lark_requests: typed requests for the Lark / Feishu open platform.

Declare a call as a pydantic model, let @request derive the Request
interface, and hand it to a client:

    from pydantic import BaseModel
    from lark_requests import Client, HttpMethod, request

    @request(HttpMethod.POST, "https://open.feishu.cn/open-apis/auth/v3/tenant_access_token/internal",
             TenantAccessToken, flatten=True)
    class GetTenantAccessTokenRequest(BaseModel):
        app_id: str
        app_secret: str

    token = Client().execute(GetTenantAccessTokenRequest(app_id="...", app_secret="..."))
"""

from .auth import GetTenantAccessTokenRequest, TenantAccessToken
from .clients import AsyncClient, Client
from .config import Settings, get_settings
from .contracts.interfaces import HttpMethod, Request
from .contracts.response_wrappers import (
    ApiResponse,
    Body,
    BodyResponse,
    FlattenResponse,
    RawResponse,
    decode_response,
)
from .decorators import request
from .errors import (
    ApiError,
    HttpStatusError,
    InvalidAddressError,
    LarkError,
    MissingDataError,
    RequestDefinitionError,
    ResponseDecodeError,
    SerializationError,
    TransportError,
)
from .params import Header, Path, Query, replace_path_params, serialize_param

__all__ = [
    # contracts
    "HttpMethod", "Request",
    "ApiResponse", "Body", "BodyResponse", "FlattenResponse", "RawResponse", "decode_response",
    # declaration
    "request", "Header", "Path", "Query", "replace_path_params", "serialize_param",
    # clients
    "AsyncClient", "Client",
    # config
    "Settings", "get_settings",
    # auth
    "GetTenantAccessTokenRequest", "TenantAccessToken",
    # errors
    "ApiError", "HttpStatusError", "InvalidAddressError", "LarkError", "MissingDataError",
    "RequestDefinitionError", "ResponseDecodeError", "SerializationError", "TransportError",
]
