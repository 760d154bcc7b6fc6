"""Tests for CodepathClient against a mocked transport."""

import json

import httpx
import pytest

from codepath.client.api_client import CodepathClient

BASE_URL = "http://codepath.test"


def _token_body(access: str, refresh: str) -> dict:
    return {
        "user": {"id": 1, "username": "learner"},
        "access_token": access,
        "refresh_token": refresh,
        "token_type": "bearer",
        "expires_in": 3600,
    }


class TestCodepathClient:
    @pytest.mark.asyncio
    async def test_login_stores_tokens_and_sends_bearer(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path == "/api/users/login":
                return httpx.Response(200, json=_token_body("access-1", "refresh-1"))
            return httpx.Response(200, json={"id": 1, "learning_progress": []})

        async with CodepathClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            assert not client.is_authenticated
            await client.login("l@example.com", "secret1")
            profile = await client.get_profile()

        assert client.is_authenticated
        assert profile["id"] == 1
        assert json.loads(seen[0].content) == {"email": "l@example.com", "password": "secret1"}
        assert seen[1].headers["Authorization"] == "Bearer access-1"

    @pytest.mark.asyncio
    async def test_refreshes_once_on_401(self) -> None:
        calls: list[tuple[str, str | None]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.url.path, request.headers.get("Authorization")))
            if request.url.path == "/api/users/refresh":
                assert json.loads(request.content) == {"refresh_token": "refresh-1"}
                return httpx.Response(200, json=_token_body("access-2", "refresh-2"))
            if request.headers.get("Authorization") == "Bearer access-1":
                return httpx.Response(401, json={"message": "Could not validate credentials"})
            return httpx.Response(200, json={"id": 1})

        client = CodepathClient(
            BASE_URL,
            access_token="access-1",
            refresh_token="refresh-1",
            transport=httpx.MockTransport(handler),
        )
        await client.get_profile()
        await client.close()

        assert calls == [
            ("/api/users/profile", "Bearer access-1"),
            ("/api/users/refresh", None),
            ("/api/users/profile", "Bearer access-2"),
        ]

    @pytest.mark.asyncio
    async def test_failed_refresh_raises_original_401(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Invalid or expired refresh token"})

        client = CodepathClient(
            BASE_URL, access_token="a", refresh_token="r", transport=httpx.MockTransport(handler)
        )
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.get_profile()
        await client.close()

        assert exc_info.value.response.status_code == 401

    @pytest.mark.asyncio
    async def test_list_by_language_drops_empty_filters(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with CodepathClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            await client.list_by_language("python", content_type="video")

        assert seen[0].url.path == "/api/content/language/python"
        assert dict(seen[0].url.params) == {"type": "video"}

    @pytest.mark.asyncio
    async def test_validate_reset_token(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/good"):
                return httpx.Response(200, json={"message": "Token is valid"})
            return httpx.Response(400, json={"message": "Invalid or expired password reset token"})

        async with CodepathClient(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            assert await client.validate_reset_token("good")
            assert not await client.validate_reset_token("bad")

    @pytest.mark.asyncio
    async def test_logout_forgets_tokens(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"message": "Logged out successfully"})

        client = CodepathClient(
            BASE_URL, access_token="a", refresh_token="r", transport=httpx.MockTransport(handler)
        )
        await client.logout()
        await client.close()

        assert not client.is_authenticated
