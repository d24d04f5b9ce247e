"""Tests for the export and job polling endpoints."""

import pytest
from httpx import AsyncClient

from brandmotion.schemas.job import JobStatus

pytestmark = pytest.mark.asyncio


class TestExportEndpoint:
    async def test_accepts_export(self, client: AsyncClient, payload_factory, job_store):
        response = await client.post("/api/export", json=payload_factory(2))

        assert response.status_code == 202
        data = response.json()
        assert data["status"] == "pending"
        assert data["checkStatusAt"] == f"/api/jobs/{data['jobId']}"
        assert await job_store.get(data["jobId"]) is not None

    async def test_too_many_scenes(self, client: AsyncClient, payload_factory, job_store):
        response = await client.post("/api/export", json=payload_factory(11))

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "too_many_scenes"
        assert await job_store.list() == []

    async def test_scenes_required(self, client: AsyncClient, payload_factory):
        payload = payload_factory(1)
        del payload["scenes"]

        response = await client.post("/api/export", json=payload)

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "scenes_missing"

    async def test_empty_scenes(self, client: AsyncClient, payload_factory):
        response = await client.post("/api/export", json=payload_factory(0))

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "scenes_empty"

    async def test_unsupported_aspect_ratio(self, client: AsyncClient, payload_factory):
        response = await client.post("/api/export", json=payload_factory(1, aspectRatio="2:1"))

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "unsupported_aspect_ratio"

    async def test_sub_millisecond_duration_rejected(
        self, client: AsyncClient, payload_factory, job_store
    ):
        payload = payload_factory(1)
        payload["scenes"][0]["duration"] = 0.0004

        response = await client.post("/api/export", json=payload)

        assert response.status_code == 422
        assert "at least 1 millisecond" in response.text
        assert await job_store.list() == []

    async def test_invalid_audio_volume(self, client: AsyncClient, payload_factory):
        payload = payload_factory(1, audio={"dataUrl": "data:audio/mpeg;base64,AA==", "volume": 5})

        response = await client.post("/api/export", json=payload)

        assert response.status_code == 422


class TestJobEndpoints:
    async def test_poll_until_complete(self, client: AsyncClient, payload_factory, orchestrator):
        job_id = (await client.post("/api/export", json=payload_factory(1))).json()["jobId"]
        await orchestrator.join()

        response = await client.get(f"/api/jobs/{job_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["label"] == "Export Complete"
        assert data["progress"] == 100
        assert data["outputUrl"] == f"/output/{job_id}.mp4"
        assert data["width"] == 1920
        assert "error" not in data

    async def test_failed_job_has_error(
        self, client: AsyncClient, payload_factory, orchestrator, sampler
    ):
        sampler.error = RuntimeError("page crashed")
        job_id = (await client.post("/api/export", json=payload_factory(1))).json()["jobId"]
        await orchestrator.join()

        data = (await client.get(f"/api/jobs/{job_id}")).json()

        assert data["status"] == JobStatus.FAILED.value
        assert data["error"] == "page crashed"
        assert "outputUrl" not in data

    async def test_unknown_job(self, client: AsyncClient):
        response = await client.get("/api/jobs/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "Job not found"

    async def test_list_jobs(self, client: AsyncClient, payload_factory, orchestrator):
        await client.post("/api/export", json=payload_factory(1))
        await client.post("/api/export", json=payload_factory(1))
        await orchestrator.join()

        jobs = (await client.get("/api/jobs")).json()["jobs"]

        assert len(jobs) == 2
        assert all(job["status"] == "completed" for job in jobs)

    async def test_delete_job(self, client: AsyncClient, payload_factory, orchestrator):
        job_id = (await client.post("/api/export", json=payload_factory(1))).json()["jobId"]
        await orchestrator.join()

        assert (await client.delete(f"/api/jobs/{job_id}")).status_code == 204
        assert (await client.get(f"/api/jobs/{job_id}")).status_code == 404
        assert (await client.delete(f"/api/jobs/{job_id}")).status_code == 404
