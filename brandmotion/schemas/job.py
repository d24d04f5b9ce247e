from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from brandmotion.core.datetime_utils import utc_now
from brandmotion.schemas.common import CamelModel
from brandmotion.schemas.export import ExportRequest


class JobStatus(str, Enum):
    """Export job status."""

    PENDING = "pending"
    GENERATING_DOCUMENT = "generating_document"
    SAMPLING_FRAMES = "sampling_frames"
    ENCODING = "encoding"
    COMPLETED = "completed"
    FAILED = "failed"


STATUS_LABELS: dict[JobStatus, str] = {
    JobStatus.PENDING: "Queued…",
    JobStatus.GENERATING_DOCUMENT: "Preparing Scenes…",
    JobStatus.SAMPLING_FRAMES: "Rendering Animation…",
    JobStatus.ENCODING: "Encoding Video…",
    JobStatus.COMPLETED: "Export Complete",
    JobStatus.FAILED: "Export Failed",
}

TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED})


class Job(BaseModel):
    """An export job. Immutable; the store swaps in updated copies."""

    model_config = ConfigDict(frozen=True)

    id: str
    request: ExportRequest
    status: JobStatus = JobStatus.PENDING
    progress: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Set on completion
    output_path: str | None = None
    frame_count: int | None = None
    duration_seconds: float | None = None
    width: int | None = None
    height: int | None = None
    expires_at: datetime | None = None

    # Set on failure
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def output_filename(self) -> str | None:
        if not self.output_path:
            return None
        return self.output_path.replace("\\", "/").rsplit("/", 1)[-1]

    @property
    def output_url(self) -> str | None:
        if self.status != JobStatus.COMPLETED or not self.output_filename:
            return None
        return f"/output/{self.output_filename}"


class JobResponse(CamelModel):
    """Polling view of a job."""

    id: str
    status: JobStatus
    label: str
    progress: int
    output_url: str | None = None
    error: str | None = None
    frame_count: int | None = None
    duration_seconds: float | None = None
    width: int | None = None
    height: int | None = None
    expires_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_job(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            status=job.status,
            label=STATUS_LABELS[job.status],
            progress=job.progress,
            output_url=job.output_url,
            error=job.error if job.status == JobStatus.FAILED else None,
            frame_count=job.frame_count,
            duration_seconds=job.duration_seconds,
            width=job.width,
            height=job.height,
            expires_at=job.expires_at,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class JobListResponse(CamelModel):
    """Response for GET /api/jobs."""

    jobs: list[JobResponse]


class ExportAcceptedResponse(CamelModel):
    """Response for POST /api/export."""

    job_id: str
    status: JobStatus
    check_status_at: str
