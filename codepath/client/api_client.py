"""codepath REST API client with JWT authentication."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class CodepathClient:
    """HTTP client for the codepath REST API.

    Keeps the token pair from login/registration, sends the access token as
    a bearer header and refreshes it once when a request comes back 401.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        refresh_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "CodepathClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _store_tokens(self, data: dict[str, Any]) -> None:
        self._access_token = data["access_token"]
        self._refresh_token = data.get("refresh_token", self._refresh_token)

    def _headers(self) -> dict[str, str]:
        if not self._access_token:
            return {}
        return {"Authorization": f"Bearer {self._access_token}"}

    async def _refresh(self) -> bool:
        """Try to refresh the access token. Returns True on success."""
        if not self._refresh_token:
            return False
        try:
            response = await self._client.post(
                f"{API_PREFIX}/users/refresh",
                json={"refresh_token": self._refresh_token},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Token refresh failed: {e!s}")
            return False
        if response.status_code != httpx.codes.OK:
            return False
        self._store_tokens(response.json())
        logger.info("Refreshed access token")
        return True

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Make an API request, retrying once with a refreshed token on 401."""
        response = await self._client.request(
            method, f"{API_PREFIX}{path}", headers=self._headers(), **kwargs
        )

        if response.status_code == httpx.codes.UNAUTHORIZED and await self._refresh():
            response = await self._client.request(
                method, f"{API_PREFIX}{path}", headers=self._headers(), **kwargs
            )

        response.raise_for_status()
        return response

    # --- Account endpoints ---

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        learning_languages: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create an account and keep its tokens."""
        response = await self._request(
            "POST",
            "/users/register",
            json={
                "username": username,
                "email": email,
                "password": password,
                "learning_languages": learning_languages or [],
            },
        )
        data = response.json()
        self._store_tokens(data)
        return data

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate with email/password and keep the tokens."""
        response = await self._request(
            "POST", "/users/login", json={"email": email, "password": password}
        )
        data = response.json()
        self._store_tokens(data)
        logger.info("Authenticated with codepath API")
        return data

    async def logout(self) -> None:
        try:
            await self._request("POST", "/users/logout")
        finally:
            self._access_token = None
            self._refresh_token = None

    async def get_profile(self) -> dict[str, Any]:
        response = await self._request("GET", "/users/profile")
        return response.json()

    async def update_profile(self, **changes: str) -> dict[str, Any]:
        """Update username, email or password (pass current_password with new_password)."""
        response = await self._request("PUT", "/users/profile", json=changes)
        return response.json()

    async def update_progress(self, language: str, completed_topic: str) -> dict[str, Any]:
        """Report a completed topic; returns the refreshed profile."""
        response = await self._request(
            "PUT",
            "/users/progress",
            json={"language": language, "completed_topic": completed_topic},
        )
        return response.json()

    async def forgot_password(self, email: str) -> dict[str, Any]:
        response = await self._request("POST", "/users/forgot-password", json={"email": email})
        return response.json()

    async def validate_reset_token(self, token: str) -> bool:
        try:
            await self._request("GET", f"/users/reset-password/{token}")
        except httpx.HTTPStatusError as e:
            if e.response.status_code == httpx.codes.BAD_REQUEST:
                return False
            raise
        return True

    async def reset_password(self, token: str, password: str) -> dict[str, Any]:
        response = await self._request(
            "POST", f"/users/reset-password/{token}", json={"password": password}
        )
        return response.json()

    # --- Content endpoints ---

    async def list_languages(self) -> list[str]:
        response = await self._request("GET", "/content/languages")
        return response.json()

    async def list_by_language(
        self,
        language: str,
        content_type: str | None = None,
        difficulty: str | None = None,
        status: str | None = None,
    ) -> list[dict[str, Any]]:
        """List content for a language, newest first."""
        params = _params(type=content_type, difficulty=difficulty, status=status)
        response = await self._request("GET", f"/content/language/{language}", params=params)
        return response.json()

    async def search(
        self,
        query: str | None = None,
        language: str | None = None,
        content_type: str | None = None,
        difficulty: str | None = None,
    ) -> list[dict[str, Any]]:
        params = _params(query=query, language=language, type=content_type, difficulty=difficulty)
        response = await self._request("GET", "/content/search", params=params)
        return response.json()

    async def get_resources(
        self, language: str, content_type: str | None = None
    ) -> list[dict[str, Any]]:
        response = await self._request(
            "GET", f"/content/resources/{language}", params=_params(type=content_type)
        )
        return response.json()

    async def get_roadmap(self, language: str) -> dict[str, Any]:
        response = await self._request("GET", f"/content/roadmap/{language}")
        return response.json()

    async def get_content(self, content_id: int) -> dict[str, Any]:
        response = await self._request("GET", f"/content/{content_id}")
        return response.json()

    async def create_content(self, **fields: Any) -> dict[str, Any]:
        response = await self._request("POST", "/content/", json=fields)
        return response.json()

    async def update_content(self, content_id: int, **changes: Any) -> dict[str, Any]:
        response = await self._request("PUT", f"/content/{content_id}", json=changes)
        return response.json()

    async def delete_content(self, content_id: int) -> dict[str, Any]:
        response = await self._request("DELETE", f"/content/{content_id}")
        return response.json()

    async def add_review(
        self, content_id: int, rating: int, comment: str | None = None
    ) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"/content/{content_id}/reviews",
            json={"rating": rating, "comment": comment},
        )
        return response.json()

    async def get_settings(self) -> dict[str, Any]:
        response = await self._request("GET", "/settings")
        return response.json()


def _params(**values: str | None) -> dict[str, str]:
    return {key: value for key, value in values.items() if value is not None}
