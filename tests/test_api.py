from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from thought_threads.api import create_app
from thought_threads.api.routes import PositionUpdateRequest, ThoughtCreateRequest
from thought_threads.config import ThoughtThreadsConfig
from thought_threads.service import ThoughtService


@pytest.fixture
def client(service: ThoughtService) -> Iterator[TestClient]:
    app = create_app(ThoughtThreadsConfig(), service=service)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def test_request_models_default() -> None:
    assert ThoughtCreateRequest().content == ""
    assert PositionUpdateRequest().x == 0.0


def test_add_and_list_thoughts(client: TestClient) -> None:
    response = client.post("/api/thoughts", json={"content": "I love hiking in the mountains"})
    assert response.status_code == 200
    assert response.json()["thought"]["cluster"] == "ideas"
    assert response.json()["connections"] == []

    response = client.post("/api/thoughts", json={"content": "Mountain trails are my favorite"})
    body = response.json()
    assert body["thought"]["id"] == 2
    assert body["thought"]["keywords"] == ["mountain", "trails", "favorite"]
    assert body["connections"] == [{"source_id": 2, "target_id": 1, "strength": 0.1}]

    listing = client.get("/api/thoughts").json()
    assert [thought["id"] for thought in listing["thoughts"]] == [1, 2]
    assert len(listing["connections"]) == 1


def test_empty_content_is_rejected(client: TestClient) -> None:
    assert client.post("/api/thoughts", json={"content": "   "}).status_code == 400
    assert client.post("/api/thoughts", json={}).status_code == 400
    assert client.get("/api/health").json() == {"status": "ok", "thoughts": 0}


def test_position_update(client: TestClient, service: ThoughtService) -> None:
    client.post("/api/thoughts", json={"content": "I love python coding"})
    response = client.patch("/api/thoughts/1/position", json={"x": 40.5, "y": -2})
    assert response.json() == {"success": True}
    moved = service.store.get_thought(1)
    assert (moved.x, moved.y) == (40.5, -2.0)
    assert client.patch("/api/thoughts/9/position", json={"x": 1, "y": 1}).status_code == 404


def test_delete_is_idempotent(client: TestClient) -> None:
    client.post("/api/thoughts", json={"content": "I love hiking in the mountains"})
    client.post("/api/thoughts", json={"content": "Mountain trails are my favorite"})
    assert client.delete("/api/thoughts/1").json() == {"success": True}
    assert client.delete("/api/thoughts/1").json() == {"success": True}
    listing = client.get("/api/thoughts").json()
    assert [thought["id"] for thought in listing["thoughts"]] == [2]
    assert listing["connections"] == []


def test_clear_and_graph(client: TestClient) -> None:
    client.post("/api/thoughts", json={"content": "I love python coding"})
    client.post("/api/thoughts", json={"content": "Debugging the python api and database"})
    graph = client.get("/api/graph").json()
    assert [node["id"] for node in graph["nodes"]] == [1, 2]
    assert graph["nodes"][0]["color"] == "#6366f1"
    assert graph["links"][0]["source"] == 2
    assert graph["links"][0]["target"] == 1

    assert client.delete("/api/thoughts").json() == {"success": True}
    assert client.get("/api/graph").json() == {"nodes": [], "links": []}


def test_app_opens_its_own_store(tmp_path: Path) -> None:
    config = ThoughtThreadsConfig.from_dict({"store": {"path": str(tmp_path / "api.db")}})
    with TestClient(create_app(config)) as client:
        client.post("/api/thoughts", json={"content": "I love python coding"})
        assert client.get("/api/health").json()["thoughts"] == 1
    assert (tmp_path / "api.db").exists()
