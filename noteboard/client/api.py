"""
HTTP Client for the notes API.

Provides an async HTTP client for communicating with the notes API.
All requests include an X-Frontend-ID header for log routing.
"""

from typing import Any

import httpx

from noteboard.core.config import get_api_settings, get_app_config, get_settings
from noteboard.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class APIClient:
    """
    HTTP client for notes API communication.

    Features:
    - Base URL and timeout from application.yaml
    - X-Frontend-ID header for log routing
    - Optional bearer token from config/.env
    - Structured logging of requests/responses

    Usage:
        client = APIClient()
        response = await client.get("/notes")
        response = await client.put("/notes/1", json={"pinned": 1})
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        frontend_id: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Notes API base URL. If None, reads from application.yaml.
            timeout: Request timeout in seconds. If None, reads from application.yaml.
            frontend_id: Value of the X-Frontend-ID header. If None, reads from application.yaml.
            token: Bearer token. If None, reads NOTES_API_TOKEN from config/.env.
            transport: Optional httpx transport (used by tests).
        """
        if base_url is None or timeout is None or frontend_id is None:
            try:
                config_base_url, config_timeout = get_api_settings()
                config_frontend_id = get_app_config().application.api.frontend_id
            except Exception as e:
                if base_url is None:
                    raise RuntimeError(
                        "Could not determine notes API URL from config/settings/application.yaml"
                    ) from e
                config_base_url = base_url
                config_timeout = DEFAULT_TIMEOUT
                config_frontend_id = "tui"
        else:
            config_base_url, config_timeout, config_frontend_id = base_url, timeout, frontend_id

        if token is None:
            try:
                token = get_settings().notes_api_token
            except RuntimeError:
                token = ""

        self.base_url = (base_url or config_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config_timeout
        self.frontend_id = frontend_id or config_frontend_id
        self._token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        headers = {"X-Frontend-ID": self.frontend_id}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the notes API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., /notes, /notes/1)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            httpx.HTTPError: On request failure
        """
        client = await self._get_client()

        log_with_source(logger, "api", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e) or e.__class__.__name__,
            )
            raise

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, **kwargs)
