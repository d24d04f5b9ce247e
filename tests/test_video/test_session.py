"""Tests for the editor export session state machine."""

from unittest.mock import AsyncMock

import pytest

from brandmotion.core.exceptions import ExportInProgress, ExportRejected
from brandmotion.schemas.job import JobStatus
from brandmotion.video.session import ExportSession, ExportState

from conftest import FakeSampler, make_request

pytestmark = pytest.mark.asyncio


class TestExportSession:
    async def test_starts_idle(self, orchestrator):
        session = ExportSession(orchestrator)
        assert session.state == ExportState.IDLE
        assert session.progress == 0

    async def test_start_then_success(self, orchestrator):
        session = ExportSession(orchestrator)

        job = await session.start(make_request(1))
        assert session.state == ExportState.EXPORTING
        assert session.job_id == job.id
        assert session.message == "Queued…"

        await orchestrator.join()
        state = await session.poll()

        assert state == ExportState.SUCCESS
        assert session.progress == 100
        assert session.message == "Export Complete"
        assert session.output_url == f"/output/{job.id}.mp4"

    async def test_second_start_while_exporting(self, orchestrator):
        session = ExportSession(orchestrator)
        await session.start(make_request(1))

        with pytest.raises(ExportInProgress):
            await session.start(make_request(1))
        await orchestrator.join()

    async def test_rejection_moves_to_error(self, orchestrator):
        session = ExportSession(orchestrator)

        with pytest.raises(ExportRejected):
            await session.start(make_request(11))

        assert session.state == ExportState.ERROR
        assert session.error == "Maximum 10 scenes allowed (got 11)"
        assert session.job_id is None

    async def test_failed_job_reports_error(self, orchestrator, sampler: FakeSampler):
        sampler.error = RuntimeError("Navigation timeout")
        session = ExportSession(orchestrator)

        await session.start(make_request(1))
        await orchestrator.join()

        assert await session.poll() == ExportState.ERROR
        assert session.error == "Navigation timeout"
        assert session.message == "Export Failed"

    async def test_poll_failure_keeps_state(self, orchestrator):
        session = ExportSession(orchestrator)
        await session.start(make_request(1))
        await orchestrator.join()

        original_get = orchestrator.store.get
        orchestrator.store.get = AsyncMock(side_effect=ConnectionError("store unavailable"))
        try:
            assert await session.poll() == ExportState.EXPORTING
        finally:
            orchestrator.store.get = original_get

        assert await session.poll() == ExportState.SUCCESS

    async def test_missing_job_is_error(self, orchestrator, job_store):
        session = ExportSession(orchestrator)
        job = await session.start(make_request(1))
        await orchestrator.join()
        await job_store.delete(job.id)

        assert await session.poll() == ExportState.ERROR
        assert session.error == "Export job not found"

    async def test_cancel_returns_to_idle(self, orchestrator, job_store):
        session = ExportSession(orchestrator)
        job = await session.start(make_request(1))

        session.cancel()
        assert session.state == ExportState.IDLE
        assert session.job_id is None
        assert session.message == "Cancelled"

        # The render is not stopped
        await orchestrator.join()
        assert (await job_store.get(job.id)).status == JobStatus.COMPLETED

    async def test_can_start_again_after_success(self, orchestrator):
        session = ExportSession(orchestrator)
        await session.start(make_request(1))
        await orchestrator.join()
        await session.poll()

        await session.start(make_request(1))
        assert session.state == ExportState.EXPORTING
        assert session.output_url is None
        await orchestrator.join()

    async def test_wait_polls_until_done(self, orchestrator):
        session = ExportSession(orchestrator)
        await session.start(make_request(1))

        assert await session.wait(poll_interval=0.01) == ExportState.SUCCESS
