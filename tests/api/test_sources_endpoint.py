"""
Test suite for source management endpoints.

System role: Verification of /api/sources-context and /api/sources/*
"""


def _add_text(client, title: str, content: str) -> dict:
    response = client.post("/api/embed-text", json={"title": title, "content": content})
    assert response.status_code == 200
    return response.json()["source"]


class TestSourcesContext:
    def test_empty(self, client):
        response = client.get("/api/sources-context")

        assert response.status_code == 200
        assert response.json() == {"totalSources": 0, "sources": []}

    def test_lists_in_insertion_order(self, client):
        first = _add_text(client, "First", "one")
        second = _add_text(client, "Second", "two")

        body = client.get("/api/sources-context").json()

        assert body["totalSources"] == 2
        assert [s["id"] for s in body["sources"]] == [first["id"], second["id"]]
        assert set(body["sources"][0]) >= {"id", "type", "title", "excerpt", "ingestedAt"}
        assert "origin" not in body["sources"][0]


class TestRemoveSource:
    def test_remove_existing(self, client):
        kept = _add_text(client, "Kept", "keep me")
        removed = _add_text(client, "Removed", "remove me")

        response = client.delete(f"/api/sources/{removed['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["removedSource"]["id"] == removed["id"]
        assert body["totalSources"] == 1
        assert body["note"]
        listed = client.get("/api/sources-context").json()["sources"]
        assert [s["id"] for s in listed] == [kept["id"]]

    def test_remove_unknown(self, client):
        _add_text(client, "Only", "content")

        response = client.delete("/api/sources/source_unknown")

        assert response.status_code == 404
        assert response.json() == {"error": "Source not found: source_unknown"}
        assert client.get("/api/sources-context").json()["totalSources"] == 1

    def test_removed_content_still_retrievable(self, client, memory_store):
        source = _add_text(client, "Ghost", "ghost content")

        client.delete(f"/api/sources/{source['id']}")

        assert any(r.metadata["source_id"] == source["id"] for r in memory_store.records())


class TestClearSources:
    def test_clear(self, client, memory_store):
        _add_text(client, "A", "alpha")
        _add_text(client, "B", "beta")

        response = client.delete("/api/sources/clear")

        assert response.status_code == 200
        assert response.json() == {
            "message": "All sources and embeddings cleared successfully",
            "totalSources": 0,
        }
        assert client.get("/api/sources-context").json()["totalSources"] == 0
        assert memory_store.records() == []

    def test_clear_empty_knowledge_base(self, client):
        assert client.delete("/api/sources/clear").status_code == 200

    def test_clear_store_failure(self, client, memory_store):
        _add_text(client, "A", "alpha")
        memory_store.fail_on.add("delete")

        response = client.delete("/api/sources/clear")

        assert response.status_code == 500
        assert "error" in response.json()
        assert client.get("/api/sources-context").json()["totalSources"] == 1
