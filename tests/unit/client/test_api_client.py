"""Unit tests for the notes API HTTP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from noteboard.client.api import APIClient


class TestAPIClient:
    """Tests for APIClient class."""

    @pytest.fixture
    def client(self) -> APIClient:
        """Create a test client."""
        return APIClient(base_url="http://test:5000", timeout=5.0, frontend_id="tui", token="")

    @pytest.mark.asyncio
    async def test_client_initialization(self, client: APIClient) -> None:
        assert client.base_url == "http://test:5000"
        assert client.timeout == 5.0

    @pytest.mark.asyncio
    async def test_client_strips_trailing_slash(self) -> None:
        client = APIClient(base_url="http://test:5000/", timeout=5.0, frontend_id="tui", token="")
        assert client.base_url == "http://test:5000"

    @pytest.mark.asyncio
    async def test_config_values_fill_missing_arguments(self) -> None:
        """Timeout and frontend id come from application.yaml when omitted."""
        client = APIClient(base_url="http://other:1234", token="")
        assert client.base_url == "http://other:1234"
        assert client.timeout == 10.0
        assert client.frontend_id == "tui"

    @pytest.mark.asyncio
    async def test_get_request(self, client: APIClient) -> None:
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = 200

        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = mock_response

            response = await client.get("/notes")

            assert response.status_code == 200
            mock_request.assert_awaited_once_with("GET", "/notes")

        await client.close()

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, client: APIClient) -> None:
        with patch.object(
            httpx.AsyncClient, "request", new_callable=AsyncMock,
            side_effect=httpx.ConnectError("refused"),
        ):
            with pytest.raises(httpx.ConnectError):
                await client.delete("/notes/1")

        await client.close()

    @pytest.mark.asyncio
    async def test_client_includes_frontend_header(self, client: APIClient) -> None:
        internal_client = await client._get_client()
        assert internal_client.headers.get("X-Frontend-ID") == "tui"
        assert "Authorization" not in internal_client.headers
        await client.close()

    @pytest.mark.asyncio
    async def test_bearer_token_header(self) -> None:
        client = APIClient(base_url="http://test:5000", timeout=5.0, frontend_id="tui", token="s3cret")
        internal_client = await client._get_client()
        assert internal_client.headers.get("Authorization") == "Bearer s3cret"
        await client.close()

    @pytest.mark.asyncio
    async def test_close_client(self, client: APIClient) -> None:
        await client._get_client()
        assert client._client is not None

        await client.close()
        assert client._client is None

    @pytest.mark.asyncio
    async def test_uses_given_transport(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
        client = APIClient(
            base_url="http://test:5000", timeout=5.0, frontend_id="tui", token="", transport=transport,
        )

        response = await client.get("/notes")

        assert response.json() == []
        await client.close()
