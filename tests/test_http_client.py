"""
Test suite for the HTTP client
"""

import base64

import httpx
import pytest

from sentinel.config.schema import AuthConfig
from sentinel.core.errors import TransportError
from sentinel.core.http_client import HTTPClient, build_auth_header

BASE_URL = "https://api.example.com"


def echo_transport(seen):
    """MockTransport recording each request and answering with mixed-case headers."""
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"X-Custom-Header": "yes"}, text="ok")
    return httpx.MockTransport(handler)


class TestHTTPClient:

    @pytest.mark.asyncio
    async def test_resolves_path_and_lowercases_headers(self):
        seen = []
        async with HTTPClient(BASE_URL, transport=echo_transport(seen)) as client:
            response = await client.request("GET", path="/health")

        assert str(seen[0].url) == "https://api.example.com/health"
        assert response.status_code == 200
        assert response.headers["x-custom-header"] == "yes"
        assert response.url == "https://api.example.com/health"
        assert response.text == "ok"

    @pytest.mark.asyncio
    async def test_absolute_url_wins_over_path(self):
        seen = []
        async with HTTPClient(BASE_URL, transport=echo_transport(seen)) as client:
            await client.request("GET", path="/ignored", url="https://other.example.com/x")
        assert str(seen[0].url) == "https://other.example.com/x"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("auth,header,value", [
        (AuthConfig(type="bearer", bearer_token="tok"), "authorization", "Bearer tok"),
        (
            AuthConfig(type="basic", basic_user="user", basic_pass="pass"),
            "authorization",
            "Basic " + base64.b64encode(b"user:pass").decode(),
        ),
        (AuthConfig(type="apiKey", api_key_header="X-API-Key", api_key_value="k1"), "x-api-key", "k1"),
    ])
    async def test_auth_header_injected(self, auth, header, value):
        seen = []
        client = HTTPClient(BASE_URL, auth_header=build_auth_header(auth), transport=echo_transport(seen))
        async with client:
            await client.request("GET", path="/")
        assert seen[0].headers[header] == value

    @pytest.mark.asyncio
    async def test_precedence_defaults_auth_request(self):
        seen = []
        client = HTTPClient(
            BASE_URL,
            default_headers={"User-Agent": "sentinel/test", "Authorization": "default"},
            auth_header=build_auth_header(AuthConfig(type="bearer", bearer_token="tok")),
            transport=echo_transport(seen),
        )
        async with client:
            await client.request("GET", path="/")
            await client.request("GET", path="/", headers={"authorization": ""})

        assert seen[0].headers["user-agent"] == "sentinel/test"
        assert seen[0].headers["authorization"] == "Bearer tok"
        assert seen[1].headers["authorization"] == ""

    @pytest.mark.asyncio
    async def test_redirects_not_followed(self):
        def handler(request):
            return httpx.Response(302, headers={"Location": "https://elsewhere.example.com/"})

        async with HTTPClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            response = await client.request("GET", path="/")

        assert response.status_code == 302
        assert response.is_redirect
        assert response.headers["location"] == "https://elsewhere.example.com/"

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with HTTPClient(BASE_URL, timeout_ms=100, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.request("GET", path="/slow")

        assert exc_info.value.url == "https://api.example.com/slow"
        assert "timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with HTTPClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError):
                await client.request("GET", path="/")


def test_no_auth_header_for_none():
    assert build_auth_header(AuthConfig())() == {}
