"""Export job storage.

Jobs are immutable ``Job`` models; an update swaps in a new copy under the
job id, so readers never observe a half-applied change. Each job is only
written by the task that drives it.
"""

from abc import ABC, abstractmethod
from typing import Any

from brandmotion.core.datetime_utils import utc_now
from brandmotion.schemas.job import Job


class JobStore(ABC):
    """Abstract base class for job stores."""

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Insert a new job. Raises ValueError if the id is taken."""
        ...

    @abstractmethod
    async def get(self, job_id: str) -> Job | None:
        ...

    @abstractmethod
    async def update(self, job_id: str, **changes: Any) -> Job | None:
        """Replace a job with a copy carrying ``changes``; None if missing."""
        ...

    @abstractmethod
    async def list(self) -> list[Job]:
        """All jobs, newest first."""
        ...

    @abstractmethod
    async def delete(self, job_id: str) -> bool:
        ...


class InMemoryJobStore(JobStore):
    """Process-local job store backed by a dict."""

    def __init__(self) -> None:
        self._jobs: dict[str, Job] = {}

    async def create(self, job: Job) -> Job:
        if job.id in self._jobs:
            raise ValueError(f"Job {job.id} already exists")
        self._jobs[job.id] = job
        return job

    async def get(self, job_id: str) -> Job | None:
        return self._jobs.get(job_id)

    async def update(self, job_id: str, **changes: Any) -> Job | None:
        current = self._jobs.get(job_id)
        if current is None:
            return None
        updated = current.model_copy(update={**changes, "updated_at": utc_now()})
        self._jobs[job_id] = updated
        return updated

    async def list(self) -> list[Job]:
        return sorted(self._jobs.values(), key=lambda job: job.created_at, reverse=True)

    async def delete(self, job_id: str) -> bool:
        return self._jobs.pop(job_id, None) is not None
