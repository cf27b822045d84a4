import json
from typing import Annotated

import httpx
import pytest
from pydantic import BaseModel

from lark_requests.auth import GetTenantAccessTokenRequest
from lark_requests.clients.async_client import AsyncClient
from lark_requests.contracts.interfaces import HttpMethod
from lark_requests.contracts.response_wrappers import Body
from lark_requests.decorators import request
from lark_requests.errors import ApiError, ResponseDecodeError, TransportError
from lark_requests.params import Header


class Message(Body):
    message_id: str


@request(HttpMethod.POST, "/open-apis/im/v1/messages", Message)
class SendMessageRequest(BaseModel):
    token: Annotated[str, Header("Authorization", with_="Bearer ")]
    receive_id: str
    msg_type: str
    content: str


def _client(handler):
    return AsyncClient(base_url="https://open.feishu.cn", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_execute_sends_json_body_and_decodes_data():
    seen = []

    def handler(req: httpx.Request) -> httpx.Response:
        seen.append(req)
        return httpx.Response(200, json={"code": 0, "msg": "ok", "data": {"message_id": "om_1"}})

    async with _client(handler) as client:
        message = await client.execute(
            SendMessageRequest(token="t-abc", receive_id="ou_1", msg_type="text", content='{"text":"hi"}')
        )

    assert message.message_id == "om_1"
    sent = seen[0]
    assert sent.method == "POST"
    assert str(sent.url) == "https://open.feishu.cn/open-apis/im/v1/messages"
    assert sent.headers["Authorization"] == "Bearer t-abc"
    assert sent.headers["Content-Type"].startswith("application/json")
    assert json.loads(sent.content) == {"receive_id": "ou_1", "msg_type": "text", "content": '{"text":"hi"}'}


@pytest.mark.asyncio
async def test_execute_flattened_token():
    def handler(req: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": 0, "msg": "ok", "tenant_access_token": "t-1", "expire": 7200})

    async with _client(handler) as client:
        token = await client.execute(GetTenantAccessTokenRequest(app_id="a", app_secret="b"))

    assert token.tenant_access_token == "t-1"
    assert token.expire == 7200


@pytest.mark.asyncio
async def test_api_error_is_raised():
    def handler(req: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": 230002, "msg": "bot not in chat", "data": {}})

    async with _client(handler) as client:
        with pytest.raises(ApiError) as excinfo:
            await client.execute(SendMessageRequest(token="t", receive_id="oc_1", msg_type="text", content="{}"))

    assert excinfo.value.code == 230002


@pytest.mark.asyncio
async def test_malformed_body_is_decode_error():
    def handler(req: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b'{"tenant_access_token":}')

    async with _client(handler) as client:
        with pytest.raises(ResponseDecodeError):
            await client.execute(GetTenantAccessTokenRequest(app_id="a", app_secret="b"))


@pytest.mark.asyncio
async def test_connect_failure_is_transport_error():
    def handler(req: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=req)

    async with _client(handler) as client:
        with pytest.raises(TransportError, match="connect error"):
            await client.execute(GetTenantAccessTokenRequest(app_id="a", app_secret="b"))


@request(HttpMethod.POST, "/open-apis/search")
class TaggedSearchRequest(BaseModel):
    first_tag: Annotated[str, Header("X-Tag")]
    second_tag: Annotated[str, Header("X-Tag")]
    query: str


@pytest.mark.asyncio
async def test_repeated_headers_are_sent_separately():
    seen = []

    def handler(req: httpx.Request) -> httpx.Response:
        seen.append(req)
        return httpx.Response(200, json={"code": 0, "msg": "ok", "data": {"items": []}})

    async with _client(handler) as client:
        result = await client.execute(TaggedSearchRequest(first_tag="a", second_tag="b", query="q"))

    assert result["data"] == {"items": []}
    assert seen[0].headers.get_list("X-Tag") == ["a", "b"]


@pytest.mark.asyncio
async def test_explicit_zero_connect_timeout_is_kept():
    async with AsyncClient(base_url="https://open.feishu.cn", connect_timeout=0) as client:
        assert client.connect_timeout == 0
        assert client.timeout == 7.0
