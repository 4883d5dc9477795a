"""Tests for the FastAPI documentation API.

WHY: Validates that the API endpoints behave correctly: happy paths,
error cases, and the per-request naming scope. Uses FastAPI TestClient
for synchronous in-process testing.

HOW: Each test function exercises one endpoint behavior by posting tree
dumps built with tree_builders and checking status codes and bodies.

RULES:
- All tests use the FastAPI TestClient (synchronous)
- Each request is its own documentation run, so tests share no state
- Tests cover: happy paths, 400 bad format, 422 invalid trees
"""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from ddl_docgen import __version__
from ddl_docgen.server.app import app

from tree_builders import method, parameter, protocol, structure, tree


@pytest.fixture
def client():
    return TestClient(app)


# ---------------------------------------------------------------------------
# POST /documentation
# ---------------------------------------------------------------------------


class TestCreateDocumentation:
    def test_default_formats(self, client, sample_tree_dict):
        resp = client.post("/documentation", json={"trees": [sample_tree_dict]})
        assert resp.status_code == 200
        body = resp.json()
        assert [d["name"] for d in body["documents"]] == ["Friends"]
        filenames = sorted(f["filename"] for f in body["documents"][0]["files"])
        assert filenames == ["Friends.json", "Friends.md"]
        assert body["non_protocol_trees"] == []

    def test_selected_format(self, client, sample_tree_dict):
        resp = client.post(
            "/documentation",
            json={"trees": [sample_tree_dict], "formats": ["markdown"]},
        )
        assert resp.status_code == 200
        files = resp.json()["documents"][0]["files"]
        assert len(files) == 1
        assert files[0]["media_type"] == "text/markdown"
        assert files[0]["content"].startswith("## [NEX-Protocols](")

    def test_names_disambiguated_within_request(self, client):
        resp = client.post("/documentation", json={
            "trees": [tree(protocol("Friends", [])), tree(protocol("Friends", []))],
            "formats": ["markdown"],
        })
        documents = resp.json()["documents"]
        assert [(d["name"], d["tree_index"]) for d in documents] == [
            ("Friends", 0), ("Friends (2)", 1),
        ]
        assert documents[1]["files"][0]["filename"] == "Friends (2).md"

    def test_requests_do_not_share_names(self, client):
        payload = {"trees": [tree(protocol("Friends", []))], "formats": ["markdown"]}
        client.post("/documentation", json=payload)
        resp = client.post("/documentation", json=payload)
        assert resp.json()["documents"][0]["name"] == "Friends"

    def test_non_protocol_tree_returned_raw(self, client):
        data = tree(structure("Lonely", []))
        resp = client.post("/documentation", json={"trees": [data]})
        body = resp.json()
        assert body["documents"] == []
        assert len(body["non_protocol_trees"]) == 1
        entry = body["non_protocol_trees"][0]
        assert entry["key"] == "non-protocol-tree-0"
        assert entry["tree_index"] == 0
        assert json.loads(entry["content"]) == data

    def test_unknown_format_400(self, client, sample_tree_dict):
        resp = client.post(
            "/documentation",
            json={"trees": [sample_tree_dict], "formats": ["html"]},
        )
        assert resp.status_code == 400
        assert "Unknown output format 'html'" in resp.json()["detail"]

    def test_malformed_tree_422(self, client):
        resp = client.post("/documentation", json={"trees": [{"elements": []}]})
        assert resp.status_code == 422
        assert resp.json()["detail"].startswith("Tree 0:")

    def test_structural_violation_422(self, client):
        bad = tree(protocol("Bad", [method("M", [parameter("x", "uint32", 0)])]))
        resp = client.post("/documentation", json={
            "trees": [tree(protocol("Good", [])), bad],
        })
        assert resp.status_code == 422
        assert resp.json()["detail"].startswith("Tree 1:")
        assert "unrecognized direction" in resp.json()["detail"]

    def test_missing_trees_field_422(self, client):
        resp = client.post("/documentation", json={})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# GET /formats
# ---------------------------------------------------------------------------


class TestListFormats:
    def test_lists_all_formats(self, client):
        resp = client.get("/formats")
        assert resp.status_code == 200
        assert resp.json() == [
            {"key": "json_model", "name": "JSON Model", "suffix": ".json"},
            {"key": "markdown", "name": "Markdown", "suffix": ".md"},
        ]


# ---------------------------------------------------------------------------
# GET /health
# ---------------------------------------------------------------------------


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__}
