"""Tests for timeline and preview endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestTimelineEndpoint:
    async def test_schedule_in_milliseconds(self, client: AsyncClient):
        response = await client.post(
            "/api/timeline",
            json={"scenes": [{"id": "a", "duration": "short"}, {"id": "b", "duration": 5.003}]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalDuration"] == 8003
        first, second = data["sceneTimings"]
        assert first["phases"]["entry"] == {"start": 0, "end": 600, "duration": 600}
        assert second["sceneId"] == "b"
        assert second["startTime"] == 3000
        assert second["endTime"] == 8003

    async def test_empty_scene_list(self, client: AsyncClient):
        response = await client.post("/api/timeline", json={"scenes": []})

        assert response.status_code == 200
        assert response.json() == {"totalDuration": 0, "sceneTimings": []}

    async def test_negative_duration_rejected(self, client: AsyncClient):
        response = await client.post("/api/timeline", json={"scenes": [{"duration": -1}]})
        assert response.status_code == 422


class TestPreviewEndpoint:
    async def test_returns_looping_html(self, client: AsyncClient, payload_factory):
        response = await client.post("/api/preview", json=payload_factory(2))

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "Headline 1" in html
        assert "@keyframes scene-visibility" in html
        assert "<script>" in html
        assert "var interval = 6500;" in html

    async def test_text_is_escaped(self, client: AsyncClient, payload_factory):
        payload = payload_factory(1)
        payload["scenes"][0]["headline"] = "<b>Bold</b> & more"

        html = (await client.post("/api/preview", json=payload)).text

        assert "&lt;b&gt;Bold&lt;/b&gt; &amp; more" in html
        assert "<b>Bold</b>" not in html
