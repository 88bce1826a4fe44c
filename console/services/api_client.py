"""Async HTTP client for the portfolio admin API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from console import config
from console.models.common import ApiResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the admin API failed."""

    def __init__(self, message: str, status_code: int | None = None, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.path = path

    def __str__(self) -> str:
        where = f" ({self.path})" if self.path else ""
        if self.status_code is not None:
            return f"{self.status_code}: {self.message}{where}"
        return f"{self.message}{where}"


class NotFoundError(ApiError):
    """The entity does not exist (404)."""

    pass


class AuthenticationError(ApiError):
    """Missing or rejected API token (401/403)."""

    pass


class ApiTimeoutError(ApiError):
    """The API did not answer in time."""

    pass


class ApiClient:
    """
    HTTP client for the admin API.

    Every response is wrapped as {"data": ..., "message": ..., "status": ...};
    the verbs here return the unwrapped `data`. Failures surface as ApiError
    subclasses, never as raw httpx exceptions.
    """

    def __init__(
        self,
        api_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_url = (api_url or config.settings.API_URL).rstrip("/")
        self.token = token if token is not None else (config.settings.API_TOKEN or None)
        self.timeout = timeout or config.settings.REQUEST_TIMEOUT
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _headers(self) -> dict:
        """Build request headers."""
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def get(self, path: str, params: dict | None = None) -> Any:
        """Make GET request."""
        return await self._request("GET", path, params=params)

    async def post(self, path: str, data: dict) -> Any:
        """Make POST request."""
        return await self._request("POST", path, json=data)

    async def put(self, path: str, data: dict) -> Any:
        """Make PUT request (full replace)."""
        return await self._request("PUT", path, json=data)

    async def delete(self, path: str) -> None:
        """Make DELETE request."""
        await self._request("DELETE", path)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        url = f"{self.api_url}{path}"
        try:
            res = await self.client.request(method, url, json=json, params=params, headers=self._headers())
            res.raise_for_status()
        except httpx.TimeoutException as e:
            raise ApiTimeoutError(f"request timed out: {e}", path=path) from e
        except httpx.HTTPStatusError as e:
            raise _status_error(e.response, path) from e
        except httpx.HTTPError as e:
            raise ApiError(f"request failed: {e}", path=path) from e

        logger.debug("api: %s %s -> %d", method, path, res.status_code)
        return _unwrap(res)

    async def aclose(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _unwrap(res: httpx.Response) -> Any:
    if res.status_code == 204 or not res.content:
        return None
    try:
        body = res.json()
    except ValueError as e:
        raise ApiError("response is not JSON", status_code=res.status_code, path=res.request.url.path) from e
    if isinstance(body, dict) and "data" in body:
        return ApiResponse[Any].model_validate(body).data
    return body


def _status_error(res: httpx.Response, path: str) -> ApiError:
    message = res.reason_phrase or "request failed"
    try:
        body = res.json()
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])
    except ValueError:
        pass

    if res.status_code == 404:
        return NotFoundError(message, status_code=404, path=path)
    if res.status_code in (401, 403):
        return AuthenticationError(message, status_code=res.status_code, path=path)
    return ApiError(message, status_code=res.status_code, path=path)
