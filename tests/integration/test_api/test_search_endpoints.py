"""Integration tests for variant search, address autocomplete and health endpoints."""

from unittest.mock import MagicMock

from httpx import AsyncClient

from variant_map import __version__
from variant_map.lib.geocoder import AddressSuggestion, GeocodingProviderError

SHOP = {"name": "Corner Mart", "address": "1 Main St", "latitude": 1.3521, "longitude": 103.8198}


class TestVariantSearch:
    """Tests for GET /variants/search."""

    async def test_returns_matching_names(self, client: AsyncClient) -> None:
        await client.post("/api/v1/locations/submit", json={**SHOP, "variants": ["Mango", "Mandarin", "Lime"]})
        await client.post("/api/v1/locations/submit", json={**SHOP, "variants": ["Mandarin"]})

        resp = await client.get("/api/v1/variants/search", params={"q": "MAN"})

        assert resp.status_code == 200
        assert resp.json() == ["Mandarin"]

    async def test_missing_query_returns_empty(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/variants/search")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_overlong_query_rejected(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/variants/search", params={"q": "x" * 101})
        assert resp.status_code == 422


class TestAddressSearch:
    """Tests for GET /addresses/search."""

    async def test_returns_suggestions(self, client: AsyncClient, address_service: MagicMock) -> None:
        address_service.search.return_value = [
            AddressSuggestion(address="1 Raffles Place, Singapore", lat=1.284, lng=103.8515)
        ]

        resp = await client.get("/api/v1/addresses/search", params={"q": "raffles"})

        assert resp.status_code == 200
        assert resp.json() == [{"address": "1 Raffles Place, Singapore", "lat": 1.284, "lng": 103.8515}]
        address_service.search.assert_awaited_once_with("raffles")

    async def test_provider_failure_is_bad_gateway(self, client: AsyncClient, address_service: MagicMock) -> None:
        address_service.search.side_effect = GeocodingProviderError("nominatim", "timed out")

        resp = await client.get("/api/v1/addresses/search", params={"q": "raffles"})

        assert resp.status_code == 502
        assert resp.json()["detail"] == "Failed to fetch address suggestions"


class TestHealth:
    """Tests for health and info endpoints."""

    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    async def test_info(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/info")
        assert resp.json() == {"version": __version__, "environment": "production"}
