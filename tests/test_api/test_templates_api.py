"""Tests for the editor catalog endpoint."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestTemplatesEndpoint:
    async def test_lists_entry_animations_with_exit_pairs(self, client: AsyncClient):
        response = await client.get("/api/templates")

        assert response.status_code == 200
        animations = {a["id"]: a for a in response.json()["animations"]}
        assert animations["slideLeft"]["exit"] == "slideAway"
        assert animations["fadeIn"]["exit"] == "fadeOut"
        assert "fadeOut" not in animations

    async def test_lists_formats(self, client: AsyncClient):
        data = (await client.get("/api/templates")).json()

        formats = {f["id"]: (f["width"], f["height"]) for f in data["aspectRatios"]}
        assert formats == {
            "16:9": (1920, 1080),
            "9:16": (1080, 1920),
            "1:1": (1080, 1080),
        }

    async def test_lists_fonts_sizes_tones_and_templates(self, client: AsyncClient):
        data = (await client.get("/api/templates")).json()

        assert data["fonts"][0] == "modern"
        assert "elegant" in data["fonts"]
        assert data["textSizes"] == ["small", "medium", "large", "xl"]
        assert "modern" in data["tones"]
        template_ids = [t["id"] for t in data["templates"]]
        assert template_ids == ["brand-intro", "product-launch"]
        assert data["templates"][0]["scenes"][0]["animation"] == "scaleIn"
