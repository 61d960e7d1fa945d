"""Integration tests for the HTTP API, run against both adapters."""
import pytest
from fastapi.testclient import TestClient

from apps.backend.api.errors import NOT_FOUND_BODY
from apps.backend.main import create_app
from apps.backend.services.errors import InternalError
from conftest import TOTALS_2022


class TestCompaniesEndpoints:
    def test_list_companies(self, client):
        response = client.get("/api/companies")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == len(body["companies"]) == 6
        assert body["companies"][0]["name"] == "Blue Systems"

    def test_company_detail(self, client):
        response = client.get("/api/companies/Climate Corp")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["company"]["net_zero_year"] == 2050
        assert [e["year"] for e in body["emissions"]] == [2020, 2022]
        assert body["summary"] == {
            "total_records": 2,
            "baseline_emissions": 350.0,
            "latest_emissions": 270.0,
        }

    def test_unknown_company_is_404(self, client):
        response = client.get("/api/companies/Nope Inc")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Company not found"}

    def test_peers(self, client):
        response = client.get("/api/companies/Climate Corp/peers", params={"limit": 2, "year": 2022, "seed": 1})
        assert response.status_code == 200
        body = response.json()
        assert body["sector"] == "Technology"
        assert body["year"] == 2022
        assert body["companies"][0]["is_current_company"] is True
        assert len(body["companies"]) == 3
        for peer in body["companies"][1:]:
            assert peer["total_emissions"] == TOTALS_2022[peer["name"]]

    def test_peers_same_seed_same_answer(self, client):
        params = {"limit": 1, "year": 2022, "seed": 5}
        first = client.get("/api/companies/Climate Corp/peers", params=params).json()
        second = client.get("/api/companies/Climate Corp/peers", params=params).json()
        assert first == second

    def test_peers_unknown_company(self, client):
        response = client.get("/api/companies/Nope Inc/peers", params={"year": 2022})
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_peers_unknown_company_with_negative_limit(self, client):
        response = client.get("/api/companies/Nope Inc/peers", params={"limit": -1})
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Company not found"}

    def test_peers_negative_limit_is_500(self, client):
        response = client.get("/api/companies/Climate Corp/peers", params={"limit": -1})
        assert response.status_code == 500
        assert "limit" in response.json()["error"]

    def test_search(self, client):
        body = client.get("/api/search", params={"q": "Corp", "region": "Europe"}).json()
        assert body["success"] is True
        assert body["count"] == 1
        assert body["companies"][0]["name"] == "Green Corp"

    def test_search_without_filters(self, client):
        body = client.get("/api/search").json()
        assert body["count"] == 6


class TestAggregateEndpoints:
    def test_sectors(self, client):
        body = client.get("/api/sectors", params={"year": 2022}).json()
        assert body["success"] is True
        assert body["year"] == 2022
        tech = next(s for s in body["sectors"] if s["sector"] == "Technology")
        assert tech["total_emissions"] == 580.0
        assert tech["company_count"] == 4

    def test_regions(self, client):
        body = client.get("/api/regions", params={"year": 2022}).json()
        assert [r["region"] for r in body["regions"]] == ["Europe", "North America", "Asia Pacific"]

    def test_years(self, client):
        assert client.get("/api/years").json() == {"success": True, "years": [2022, 2021, 2020]}

    def test_stats(self, client):
        stats = client.get("/api/stats").json()["stats"]
        assert stats["total_companies"] == 6
        assert stats["total_emissions_records"] == 8
        assert stats["earliest_year"] == 2020

    @pytest.mark.parametrize("path", ["/api/sectors", "/api/regions", "/api/companies/Climate Corp/peers"])
    def test_non_integer_year_is_500(self, client, path):
        response = client.get(path, params={"year": "abc"})
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "year" in body["error"]


class TestServiceEndpoints:
    def test_index_lists_endpoints(self, client):
        body = client.get("/").json()
        assert body["name"] == "Emissions API"
        assert body["endpoints"]["stats"] == "/api/stats"

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND_BODY

    @pytest.mark.parametrize("method", ["post", "put", "delete"])
    def test_unsupported_method_is_not_found(self, client, method):
        response = getattr(client, method)("/api/companies")
        assert response.status_code == 404
        assert response.json() == NOT_FOUND_BODY

    def test_health(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}
        assert client.get("/health/db").json() == {"status": "ok"}


class BrokenSource:
    """Source whose every call fails the way a dead store would."""

    def __init__(self, exc):
        self.exc = exc

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise self.exc
        return fail

    def ping(self):
        return False


class TestFailures:
    def test_store_failure_is_500(self):
        client = TestClient(create_app(source=BrokenSource(InternalError("connection refused"))))
        response = client.get("/api/stats")
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "connection refused"}

    def test_unexpected_exception_is_500(self):
        app = create_app(source=BrokenSource(RuntimeError("boom")))
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/years")
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "boom"}

    def test_health_db_unavailable(self):
        client = TestClient(create_app(source=BrokenSource(InternalError("down"))))
        response = client.get("/health/db")
        assert response.status_code == 503
