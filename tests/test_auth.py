"""Tests for CMS bearer token caching."""

import asyncio

import httpx
import pytest
from conftest import CMS_URL, FakeCms

from xibo_server.utils.auth import TokenProvider
from xibo_server.utils.errors import CmsAuthError


class TestTokenProvider:
    @pytest.mark.asyncio
    async def test_token_fetched_once_and_reused(self) -> None:
        fake = FakeCms()
        client = fake.client()

        first = await client.tokens.get_auth_headers()
        second = await client.tokens.get_auth_headers()

        assert first == second == {"Authorization": "Bearer test-token"}
        assert fake.token_requests == 1, f"Expected 1 token request, got {fake.token_requests}"

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_fetch(self) -> None:
        fake = FakeCms()
        client = fake.client()

        tokens = await asyncio.gather(*(client.tokens.get_token() for _ in range(5)))

        assert set(tokens) == {"test-token"}
        assert fake.token_requests == 1, f"Expected 1 token request, got {fake.token_requests}"

    @pytest.mark.asyncio
    async def test_expired_token_is_refreshed(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            # expires_in inside the safety margin: never considered valid
            return httpx.Response(200, json={"access_token": f"t{calls}", "expires_in": 30})

        provider = TokenProvider(
            CMS_URL, "id", "secret", expiry_margin=60, transport=httpx.MockTransport(handler)
        )

        assert await provider.get_token() == "t1"
        assert await provider.get_token() == "t2"

    @pytest.mark.asyncio
    async def test_unauthorized_response_invalidates_token(self) -> None:
        fake = FakeCms()
        fake.add("GET", "/api/user/me", 401, json={"error": "expired"})
        client = fake.client()

        await client.request("GET", "/api/user/me")
        await client.request("GET", "/api/user/me")

        assert fake.token_requests == 2, "A 401 must force a new token on the next call"

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise(self) -> None:
        fake = FakeCms()
        fake.token_status = 400

        with pytest.raises(CmsAuthError) as exc_info:
            await fake.client().tokens.get_token()

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_token_request_is_client_credentials_form(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"access_token": "abc", "expires_in": 3600})

        provider = TokenProvider(CMS_URL, "id", "secret", transport=httpx.MockTransport(handler))
        await provider.get_token()

        fields = httpx.QueryParams(seen[0].content.decode())
        assert seen[0].url.path == "/api/authorize/access_token"
        assert fields["grant_type"] == "client_credentials"
        assert fields["client_id"] == "id"
        assert fields["client_secret"] == "secret"
