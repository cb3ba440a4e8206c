import logging
from typing import Any

import httpx

from iskio.core.config import settings
from iskio.core.errors import ApiError
from iskio.core.security import is_token_expired
from iskio.core.session import AuthSession

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


class ApiClient:
    """Authenticated JSON-over-HTTP client for the ISKIO REST API.

    The bearer token is read from ``session`` on every request, so a logout
    takes effect on the next call. Any 401 clears the session before the
    error is raised.
    """

    def __init__(
        self,
        session: AuthSession,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.session = session
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        timeout = timeout if timeout is not None else settings.request_timeout_seconds
        client_kwargs: dict[str, Any] = {"transport": transport}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _current_token(self) -> str | None:
        token = self.session.get_access_token()
        if token and is_token_expired(token):
            logger.info("Stored token expired; clearing session before request")
            self.session.clear_auth_storage()
            return None
        return token

    async def fetch(
        self,
        path: str,
        method: str = "GET",
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        token = self._current_token()
        merged = {"Content-Type": "application/json"}
        if token:
            merged["Authorization"] = f"Bearer {token}"
        merged.update(headers or {})

        url = f"{self.base_url}{normalize_path(path)}"
        try:
            response = await self._client.request(
                method, url, json=json, params=params, headers=merged
            )
        except httpx.TransportError as e:
            logger.warning("Request failed: %s %s: %s", method, path, e)
            raise ApiError(str(e)) from e

        if not response.is_success:
            logger.warning(
                "API error: status=%s %s %s body=%s",
                response.status_code,
                method,
                path,
                response.text[:500],
            )
            if response.status_code == 401:
                logger.info("401 received; clearing stored session")
                self.session.clear_auth_storage()
            raise ApiError(response.text, response.status_code)

        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.fetch(path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.fetch(path, method="POST", json=json)

    async def put(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return await self.fetch(path, method="PUT", json=json, params=params)

    async def delete(self, path: str, json: Any = None, params: dict[str, Any] | None = None) -> Any:
        return await self.fetch(path, method="DELETE", json=json, params=params)
