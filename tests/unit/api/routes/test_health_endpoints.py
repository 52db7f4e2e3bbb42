from httpx import AsyncClient


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "message": "StripeKit API is running",
        }

    async def test_provider_health_check(self, client: AsyncClient, mock_provider):
        mock_provider.health_check.return_value = True

        response = await client.get("/health/provider")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "provider": "connected"}

    async def test_provider_health_check_unhealthy(
        self, client: AsyncClient, mock_provider
    ):
        mock_provider.health_check.return_value = False

        response = await client.get("/health/provider")

        assert response.json() == {"status": "unhealthy", "provider": "disconnected"}
