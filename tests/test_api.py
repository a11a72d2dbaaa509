"""
Integration Tests for the HTTP API

Each test gets a fresh container so the in-process editing session starts
empty.
"""

import json

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_container
from api.main import app
from callgraph.config import Container, Settings

pytestmark = pytest.mark.integration


@pytest.fixture
def client():
    container = Container.from_settings(Settings())
    app.dependency_overrides[get_container] = lambda: container
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def loaded_client(client, foo_bar_spec):
    response = client.post("/api/v1/graph/import", json={"document": foo_bar_spec})
    assert response.status_code == 200
    return client


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert "import" in client.get("/").json()["endpoints"]


class TestImportExport:

    def test_import_document(self, client, foo_bar_spec):
        response = client.post("/api/v1/graph/import", json={"document": foo_bar_spec})
        data = response.json()
        assert data["success"] is True
        assert data["statistics"]["num_edges"] == 1
        categories = {n["method_name"]: n["category"] for n in data["graph"]["nodes"]}
        assert categories == {"foo": "entry_point", "bar": "default"}

    def test_import_text(self, client, missing_call_spec):
        response = client.post("/api/v1/graph/import", json={"text": json.dumps(missing_call_spec)})
        assert response.status_code == 200
        assert response.json()["unresolved_calls"][0]["reference"] == "B.missing"

    def test_invalid_text_rejected_and_graph_kept(self, loaded_client):
        response = loaded_client.post("/api/v1/graph/import", json={"text": "{nope"})
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "InvalidFileContent"
        assert len(loaded_client.get("/api/v1/graph").json()["nodes"]) == 2

    def test_deeply_nested_text_rejected(self, loaded_client):
        response = loaded_client.post("/api/v1/graph/import", json={"text": "[" * 200000})
        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "InvalidFileContent"
        assert len(loaded_client.get("/api/v1/graph").json()["nodes"]) == 2

    def test_malformed_method(self, client, foo_bar_spec):
        del foo_bar_spec["services"]["A"]["methods"]["bar"]["latency_distribution"]
        response = client.post("/api/v1/graph/import", json={"document": foo_bar_spec})
        assert response.status_code == 400
        assert response.json()["detail"]["path"] == "services.A.methods.bar"

    def test_empty_import_request(self, client):
        assert client.post("/api/v1/graph/import", json={}).status_code == 400

    def test_export_json(self, loaded_client, foo_bar_spec):
        response = loaded_client.get("/api/v1/graph/export")
        assert response.status_code == 200
        assert "microservice-graph.json" in response.headers["content-disposition"]
        assert response.json() == foo_bar_spec

    def test_export_yaml(self, loaded_client):
        response = loaded_client.get("/api/v1/graph/export", params={"format": "yaml"})
        assert response.status_code == 200
        assert "container_port: 8080" in response.text

    def test_export_unknown_format(self, loaded_client):
        assert loaded_client.get("/api/v1/graph/export", params={"format": "xml"}).status_code == 400

    def test_validate(self, loaded_client):
        data = loaded_client.get("/api/v1/graph/validate").json()
        assert data["valid"] is True


class TestNodes:

    def test_create_default_node(self, client):
        response = client.post("/api/v1/nodes")
        assert response.status_code == 201
        node = response.json()
        assert node["service_name"] == "new-service"
        assert node["port"] == 50051
        assert node["category"] == "default"

    def test_create_named_node(self, client):
        node = client.post("/api/v1/nodes", json={"service_name": "svc", "method_name": "run"}).json()
        assert node["method_name"] == "run"

    def test_patch_node(self, loaded_client):
        response = loaded_client.patch(
            "/api/v1/nodes/node-1",
            json={"error_rate": {"parameters": {"p": 0.5}}},
        )
        assert response.status_code == 200
        assert response.json()["category"] == "high_error"
        category = loaded_client.get("/api/v1/nodes/node-1/category").json()
        assert category["category"] == "high_error"
        assert category["label"] == "High Error"

    def test_patch_collision(self, loaded_client):
        response = loaded_client.patch("/api/v1/nodes/node-1", json={"method_name": "foo"})
        assert response.status_code == 409
        assert loaded_client.get("/api/v1/nodes/node-1").json()["method_name"] == "bar"

    def test_unknown_node(self, loaded_client):
        assert loaded_client.patch("/api/v1/nodes/node-9", json={"port": 1}).status_code == 404
        assert loaded_client.delete("/api/v1/nodes/node-9").status_code == 404
        assert loaded_client.get("/api/v1/nodes/node-9/category").status_code == 404

    def test_delete_node_drops_edges(self, loaded_client):
        response = loaded_client.delete("/api/v1/nodes/node-1")
        assert response.status_code == 200
        assert loaded_client.get("/api/v1/graph").json()["edges"] == []

    def test_selection(self, loaded_client):
        response = loaded_client.put("/api/v1/graph/selection", json={"node_id": "node-0"})
        assert response.json()["selected_node"]["method_name"] == "foo"
        loaded_client.patch("/api/v1/nodes/node-0", json={"port": 1234})
        assert loaded_client.get("/api/v1/graph").json()["selected_node"]["port"] == 1234
        assert loaded_client.put("/api/v1/graph/selection", json={"node_id": "node-9"}).status_code == 404


class TestEdges:

    def test_connect_and_disconnect(self, loaded_client):
        response = loaded_client.post("/api/v1/edges", json={"source": "node-1", "target": "node-0"})
        assert response.status_code == 201
        edge_id = response.json()["id"]
        assert edge_id == "edge-node-1-node-0"

        exported = loaded_client.get("/api/v1/graph/export").json()
        assert exported["services"]["A"]["methods"]["bar"]["calls"] == [["A.foo"]]

        assert loaded_client.delete(f"/api/v1/edges/{edge_id}").status_code == 200
        assert loaded_client.delete(f"/api/v1/edges/{edge_id}").status_code == 404

    def test_connect_unknown_node(self, loaded_client):
        response = loaded_client.post("/api/v1/edges", json={"source": "node-0", "target": "node-9"})
        assert response.status_code == 404
