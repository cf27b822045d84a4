"""
Tenant access token.

https://open.feishu.cn/document/server-docs/authentication-management/access-token/tenant_access_token_internal

The token is returned flattened next to code/msg:

    {"code": 0, "msg": "ok", "tenant_access_token": "t-xxx", "expire": 7200}

Callers own the token lifetime; nothing here caches or refreshes it.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from lark_requests.config import Settings, get_settings
from lark_requests.contracts.interfaces import HttpMethod
from lark_requests.contracts.response_wrappers import Body
from lark_requests.decorators import request

TENANT_ACCESS_TOKEN_URL = "https://open.feishu.cn/open-apis/auth/v3/tenant_access_token/internal"


class TenantAccessToken(Body):
    tenant_access_token: str
    expire: int


@request(HttpMethod.POST, TENANT_ACCESS_TOKEN_URL, TenantAccessToken, flatten=True)
class GetTenantAccessTokenRequest(BaseModel):
    app_id: str
    app_secret: str

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "GetTenantAccessTokenRequest":
        settings = settings or get_settings()
        if not settings.app_id or not settings.app_secret:
            raise ValueError("LARK_APP_ID and LARK_APP_SECRET must be configured.")
        return cls(app_id=settings.app_id, app_secret=settings.app_secret)
