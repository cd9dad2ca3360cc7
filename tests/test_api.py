import pytest
from fastapi.testclient import TestClient

from draftroom.api.main import create_app
from draftroom.config.settings import settings
from draftroom.external.player_catalog import InMemoryPlayerCatalog
from draftroom.services.draft_service import DraftService

from conftest import make_record


@pytest.fixture
def client(service):
    app = create_app(draft_service=service)
    return TestClient(app)


def _create(client, **body):
    response = client.post("/api/v1/drafts", json=body)
    assert response.status_code == 200
    return response.json()["draftId"]


def test_create_and_describe(client):
    draft_id = _create(client, teams=4, rounds=2, format="PPR")

    response = client.get(f"/api/v1/drafts/{draft_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["draftId"] == draft_id
    assert data["teams"] == 4
    assert data["rounds"] == 2
    assert data["format"] == "ppr"
    assert data["currentIndex"] == 0
    assert data["currentTeam"] == 1
    assert data["completed"] is False
    assert data["status"] == "created"
    assert [p["team"] for p in data["picks"]] == [1, 2, 3, 4, 4, 3, 2, 1]
    assert data["picks"][0]["playerId"] is None


def test_create_clamps_out_of_range_sizes(client):
    draft_id = _create(client, teams=99, rounds=-3)

    data = client.get(f"/api/v1/drafts/{draft_id}").json()
    assert (data["teams"], data["rounds"]) == (32, 1)


def test_create_treats_zero_sizes_as_defaults(client):
    draft_id = _create(client, teams=0, rounds=0)

    data = client.get(f"/api/v1/drafts/{draft_id}").json()
    assert data["teams"] == max(2, min(32, settings.default_teams))
    assert data["rounds"] == max(1, min(30, settings.default_rounds))


def test_create_without_body_uses_defaults(client):
    response = client.post("/api/v1/drafts")

    assert response.status_code == 200
    assert response.json()["draftId"]


def test_pick_flow_and_errors(client):
    draft_id = _create(client, teams=2, rounds=1)

    response = client.post(f"/api/v1/drafts/{draft_id}/pick", json={"playerId": "p1"})
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    response = client.post(f"/api/v1/drafts/{draft_id}/pick", json={"playerId": "p1"})
    assert response.status_code == 409
    assert response.json()["error"]["type"] == "already_taken"

    response = client.post(f"/api/v1/drafts/{draft_id}/pick", json={"playerId": "ghost"})
    assert response.status_code == 400
    assert response.json()["error"]["type"] == "unknown_player"

    response = client.post(f"/api/v1/drafts/{draft_id}/pick", json={})
    assert response.status_code == 400

    data = client.get(f"/api/v1/drafts/{draft_id}").json()
    assert data["picked"] == ["p1"]
    assert data["picks"][0]["player"]["name"] == "Player 001"


def test_auto_pick_and_completion(client):
    draft_id = _create(client, teams=2, rounds=1)

    first = client.post(f"/api/v1/drafts/{draft_id}/auto-pick")
    assert first.status_code == 200
    assert first.json()["picked"]["id"] == "p1"

    client.post(f"/api/v1/drafts/{draft_id}/auto-pick")
    done = client.post(f"/api/v1/drafts/{draft_id}/auto-pick")

    assert done.status_code == 409
    assert done.json()["error"]["type"] == "already_completed"


def test_sim_to_end(client):
    draft_id = _create(client, teams=12, rounds=15)

    response = client.post(f"/api/v1/drafts/{draft_id}/sim-to-end")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "completed": True}

    data = client.get(f"/api/v1/drafts/{draft_id}").json()
    assert data["completed"] is True
    assert data["currentTeam"] is None
    assert data["currentIndex"] == 180


def test_unknown_draft_is_404(client):
    for method, path in [("get", "/api/v1/drafts/missing"),
                         ("post", "/api/v1/drafts/missing/auto-pick"),
                         ("post", "/api/v1/drafts/missing/sim-to-end")]:
        response = getattr(client, method)(path)
        assert response.status_code == 404
        assert response.json()["error"]["type"] == "not_found"


def test_players_listing(client):
    response = client.get("/api/v1/players", params={"sport": "nfl", "format": "standard"})

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 240
    assert data["players"][0]["id"] == "p1"
    assert data["players"][0]["rank"] == 1


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["catalog_players"] == 240


def test_numeric_player_id_is_accepted(store):
    catalog = InMemoryPlayerCatalog([make_record("4034", "Some Back", "RB", rank=1)])
    client = TestClient(create_app(draft_service=DraftService(store, catalog)))
    draft_id = _create(client, teams=2, rounds=1)

    response = client.post(f"/api/v1/drafts/{draft_id}/pick", json={"playerId": 4034})

    assert response.status_code == 200
    assert client.get(f"/api/v1/drafts/{draft_id}").json()["picked"] == ["4034"]
