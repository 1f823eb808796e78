"""Contract tests for POST /api/import."""

from tests.fixtures import export_bytes, make_export_conversation


def _upload(content: bytes):
    return {"file": ("conversations.json", content, "application/json")}


class TestImportEndpoint:
    async def test_import_upload(self, client):
        data = export_bytes([
            make_export_conversation(conv_id="c1"),
            make_export_conversation(conv_id="c2", mapping={}),
        ])
        resp = await client.post("/api/import", files=_upload(data))
        assert resp.status_code == 200
        body = resp.json()
        assert body["imported"] == 1
        assert body["created"] == 1
        assert body["updated"] == 0
        assert body["results"][0] == {
            "id": "c1",
            "title": "Test Conversation",
            "messageCount": 4,
            "status": "created",
        }

        listing = await client.get("/api/conversations")
        assert [c["id"] for c in listing.json()["conversations"]] == ["c1"]

    async def test_second_upload_updates(self, client):
        data = export_bytes([make_export_conversation(conv_id="c1")])
        await client.post("/api/import", files=_upload(data))
        resp = await client.post("/api/import", files=_upload(data))
        assert resp.json()["updated"] == 1
        assert resp.json()["results"][0]["status"] == "updated"

    async def test_malformed_upload_is_422(self, client):
        resp = await client.post("/api/import", files=_upload(b"not json"))
        assert resp.status_code == 422
        assert "Invalid JSON" in resp.json()["detail"]
