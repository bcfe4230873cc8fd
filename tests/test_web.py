"""Tests for the JSON API."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from vigyl.config import Settings
from vigyl.expansion import ProspectGenerator, RateLimitError
from vigyl.models import Location, ProspectRecord, UserLocale
from vigyl.web.app import create_app
from vigyl.web.state import Workspace


class StubGenerator(ProspectGenerator):
    """Returns a fixed batch, or raises a configured error."""

    def __init__(self):
        self.error = None
        self.calls = []

    async def generate(self, request):
        self.calls.append(request)
        if self.error:
            raise self.error
        return [
            ProspectRecord(
                id=f"exp-{request.vertical_id}-{len(self.calls)}",
                company_name=f"Generated {len(self.calls)}",
                location=Location(country="US", region="SC"),
            )
        ]


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def workspace(generator):
    core = [
        ProspectRecord(id="core-ga", company_name="Peach Co", location=Location("US", "GA")),
        ProspectRecord(id="core-fr", company_name="Paris Co", location=Location("France", "Paris")),
    ]
    return Workspace(
        settings=Settings(generator_api_key=""),
        generator=generator,
        locale=UserLocale(country="US", region="GA", local_radius=50),
        base_records=core,
    )


@pytest.fixture
def client(workspace):
    """Create test client."""
    return TestClient(create_app(workspace))


class TestHealth:
    """Test the health endpoint."""

    def test_health(self, client):
        """Health check returns ok."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestTaxonomyEndpoints:
    """Test taxonomy browsing."""

    def test_sectors(self, client):
        """Sector summary lists the packaged catalog."""
        response = client.get("/api/v1/taxonomy/sectors")
        assert response.status_code == 200
        assert len(response.json()) == 27

    def test_search(self, client):
        """Keyword search."""
        response = client.get("/api/v1/taxonomy/search", params={"q": "qsr"})
        assert response.status_code == 200
        ids = [v["id"] for v in response.json()["results"]]
        assert "fast-casual-qsr" in ids

    def test_untapped(self, client):
        """Tracked names are excluded."""
        response = client.post("/api/v1/taxonomy/untapped", json={"tracked": ["Cybersecurity"]})
        assert response.status_code == 200
        ids = [v["id"] for v in response.json()["results"]]
        assert "cybersecurity" not in ids

    def test_vertical(self, client):
        """Single vertical lookup."""
        response = client.get("/api/v1/taxonomy/verticals/cybersecurity")
        assert response.status_code == 200
        assert response.json()["name"] == "Cybersecurity"

    def test_unknown_vertical(self, client):
        """Unknown ids are 404."""
        response = client.get("/api/v1/taxonomy/verticals/nope")
        assert response.status_code == 404


class TestProspectEndpoints:
    """Test classification endpoints."""

    def test_classify(self, client):
        """Stateless classification ignores upstream scope."""
        response = client.post("/api/v1/prospects/classify", json={
            "locale": {"country": "US", "region": "Georgia", "local_radius": 100},
            "prospects": [
                {"id": "p1", "companyName": "A", "location": {"state": "SC", "country": "US"}},
                {"id": "p2", "companyName": "B", "location": {"state": "CA", "country": "US"},
                 "scope": "local"},
            ],
        })
        assert response.status_code == 200
        data = response.json()
        assert [r["scope"] for r in data["results"]] == ["local", "national"]
        assert data["counts"] == {"local": 1, "national": 1, "international": 0}

    def test_classify_rejects_string_location(self, client):
        """A location that is not an object is a validation error."""
        response = client.post("/api/v1/prospects/classify", json={
            "locale": {"region": "GA"},
            "prospects": [{"id": "p1", "companyName": "A", "location": "Atlanta, GA"}],
        })
        assert response.status_code == 422
        assert "location" in response.json()["detail"]

    def test_classify_radius_validated(self, client):
        """Radius outside 10-200 is a validation error."""
        response = client.post("/api/v1/prospects/classify", json={
            "locale": {"region": "GA", "local_radius": 5},
            "prospects": [],
        })
        assert response.status_code == 422

    def test_list_and_filter(self, client):
        """Workspace records are classified on read and filterable."""
        response = client.get("/api/v1/prospects")
        assert response.status_code == 200
        assert response.json()["counts"] == {"local": 1, "national": 0, "international": 1}

        response = client.get("/api/v1/prospects", params={"scope": "international"})
        assert [r["id"] for r in response.json()["results"]] == ["core-fr"]

    def test_locale_change_reclassifies(self, client):
        """Changing the locale changes later reads."""
        response = client.put("/api/v1/locale", json={"country": "France", "region": "Paris"})
        assert response.status_code == 200

        data = client.get("/api/v1/prospects").json()
        scopes = {r["id"]: r["scope"] for r in data["results"]}
        assert scopes == {"core-ga": "international", "core-fr": "local"}

        assert client.get("/api/v1/locale").json()["country"] == "France"


class TestExpansionEndpoints:
    """Test expansion endpoints."""

    def test_expand(self, client, generator):
        """Expansion merges records and updates the ledger."""
        response = client.post("/api/v1/expansions", json={
            "vertical_id": "fast-casual-qsr",
            "scope": "national",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["added"] == 1
        assert data["results"][0]["expanded_from"] == "fast-casual-qsr"
        assert data["results"][0]["scope"] == "national"
        assert generator.calls[0].vertical_name == "Fast Casual & QSR Dining"

        explored = client.get("/api/v1/expansions/explored").json()
        assert explored[0]["vertical_id"] == "fast-casual-qsr"
        assert explored[0]["times_expanded"] == 1

        assert client.get("/api/v1/prospects").json()["count"] == 3

    def test_invalid_scope(self, client):
        """Unknown scopes are a validation error."""
        response = client.post("/api/v1/expansions", json={
            "vertical_id": "fast-casual-qsr",
            "scope": "galactic",
        })
        assert response.status_code == 422

    def test_unknown_vertical(self, client):
        """Unknown verticals without a name are 404."""
        response = client.post("/api/v1/expansions", json={"vertical_id": "nope"})
        assert response.status_code == 404

    def test_tracked_vertical_outside_catalog(self, client, generator):
        """A named vertical outside the catalog can still be expanded."""
        response = client.post("/api/v1/expansions", json={
            "vertical_id": "custom-robotics",
            "vertical_name": "Warehouse Robotics",
            "sector_name": "Industrial",
        })
        assert response.status_code == 200
        assert generator.calls[0].vertical_name == "Warehouse Robotics"
        assert generator.calls[0].scope == "all"

    def test_generator_failure(self, client, generator):
        """Generator failures are 502 and change nothing."""
        generator.error = RateLimitError("Generator rate or credit limit reached")

        response = client.post("/api/v1/expansions", json={"vertical_id": "cybersecurity"})
        assert response.status_code == 502
        assert client.get("/api/v1/prospects").json()["count"] == 2
        assert client.get("/api/v1/expansions/explored").json() == []
        assert client.get("/api/v1/expansions/status").json()["last_error"]

    def test_busy(self, client, workspace):
        """A second expansion while one is in flight is 409."""
        workspace.orchestrator.expanding = "cybersecurity"

        response = client.post("/api/v1/expansions", json={"vertical_id": "fast-casual-qsr"})
        assert response.status_code == 409

    def test_remove_expanded(self, client):
        """Expanded prospects can be removed; core prospects cannot."""
        added = client.post("/api/v1/expansions", json={"vertical_id": "cybersecurity"}).json()
        record_id = added["results"][0]["id"]

        assert client.delete(f"/api/v1/prospects/{record_id}").status_code == 200
        assert client.delete("/api/v1/prospects/core-ga").status_code == 404
        assert client.get("/api/v1/prospects").json()["count"] == 2


class TestWorkspace:
    """Test workspace lifecycle."""

    def test_close(self, workspace):
        """Closing the workspace closes the generator."""
        asyncio.run(workspace.close())
