"""Tests for the MCP wiring and the HTTP discovery endpoints."""

import pytest
from starlette.testclient import TestClient

from kbgate.server.app import create_server, tool_definitions
from kbgate.server.web import create_http_app


def test_tool_definitions(registry_for):
    definitions = tool_definitions(registry_for())
    assert len(definitions) == 11
    by_name = {d.name: d for d in definitions}
    query = by_name["kb_query"]
    assert query.title == "Execute Query"
    assert query.inputSchema["required"] == ["sql"]
    assert query.annotations.readOnlyHint is True
    assert by_name["kb_execute_ddl"].annotations.destructiveHint is True


def test_create_server(registry_for):
    server = create_server(registry_for())
    assert server.name == "kbgate"


class TestHttpEndpoints:
    @pytest.fixture
    def client(self, registry_for):
        # Discovery routes do not need the MCP session manager to be running.
        return TestClient(create_http_app(registry_for()))

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["uptime"] >= 0
        assert "timestamp" in body

    def test_list_tools(self, client):
        body = client.get("/tools").json()
        assert body["count"] == 11
        query = next(t for t in body["tools"] if t["name"] == "kb_query")
        assert "\n" not in query["description"]
        assert query["annotations"]["readOnlyHint"] is True

    def test_tool_detail(self, client):
        body = client.get("/tools/kb_table_data").json()
        assert body["name"] == "kb_table_data"
        assert body["inputSchema"]["properties"]["limit"]["maximum"] == 1000

    def test_tool_not_found(self, client):
        response = client.get("/tools/kb_nope")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Tool not found"
        assert "kb_query" in body["availableTools"]
