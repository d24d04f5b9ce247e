"""Editor-side export session: start, poll and cancel one export at a time."""

import asyncio
from enum import Enum

from brandmotion.core.exceptions import ExportInProgress, ExportRejected
from brandmotion.core.logging import get_logger
from brandmotion.schemas.export import ExportRequest
from brandmotion.schemas.job import STATUS_LABELS, Job, JobStatus
from brandmotion.video.orchestrator import ExportOrchestrator

logger = get_logger(__name__)


class ExportState(str, Enum):
    IDLE = "idle"
    EXPORTING = "exporting"
    SUCCESS = "success"
    ERROR = "error"


class ExportSession:
    """
    State machine over one editor's exports.

    idle -> exporting -> success | error, and exporting -> idle on cancel.
    Cancelling only stops following the job; the render itself keeps going.
    """

    def __init__(self, orchestrator: ExportOrchestrator) -> None:
        self.orchestrator = orchestrator
        self.state = ExportState.IDLE
        self.job_id: str | None = None
        self.progress = 0
        self.message = ""
        self.output_url: str | None = None
        self.error: str | None = None

    @property
    def is_exporting(self) -> bool:
        return self.state == ExportState.EXPORTING

    async def start(self, request: ExportRequest) -> Job:
        """
        Submit an export and begin following it.

        Raises:
            ExportInProgress: if this session already has an export in flight
            ExportRejected: if the request fails intake checks
        """
        if self.is_exporting:
            raise ExportInProgress(f"Export {self.job_id} is still running")

        self._reset()
        try:
            job = await self.orchestrator.submit(request)
        except ExportRejected as e:
            self.state = ExportState.ERROR
            self.error = e.message
            raise

        self.state = ExportState.EXPORTING
        self.job_id = job.id
        self.message = STATUS_LABELS[job.status]
        logger.bind(job_id=job.id).debug("export_session_started")
        return job

    async def poll(self) -> ExportState:
        """Refresh from the job store. Lookup failures keep the last state."""
        if not self.is_exporting or self.job_id is None:
            return self.state

        try:
            job = await self.orchestrator.store.get(self.job_id)
        except (OSError, ConnectionError) as e:
            logger.bind(job_id=self.job_id, error=str(e)).warning("export_poll_failed")
            return self.state

        if job is None:
            self.state = ExportState.ERROR
            self.error = "Export job not found"
            return self.state

        self.progress = job.progress
        self.message = STATUS_LABELS[job.status]

        if job.status == JobStatus.COMPLETED:
            self.state = ExportState.SUCCESS
            self.output_url = job.output_url
        elif job.status == JobStatus.FAILED:
            self.state = ExportState.ERROR
            self.error = job.error
        return self.state

    async def wait(self, poll_interval: float = 1.0) -> ExportState:
        """Poll until the export leaves the exporting state."""
        while self.is_exporting:
            await asyncio.sleep(poll_interval)
            await self.poll()
        return self.state

    def cancel(self) -> None:
        """Stop following the current export and return to idle."""
        if not self.is_exporting:
            return
        logger.bind(job_id=self.job_id).info("export_session_cancelled")
        self._reset()
        self.message = "Cancelled"

    def _reset(self) -> None:
        self.state = ExportState.IDLE
        self.job_id = None
        self.progress = 0
        self.message = ""
        self.output_url = None
        self.error = None
