"""Export job polling endpoints."""

from fastapi import APIRouter, HTTPException, status

from brandmotion.dependencies import Jobs
from brandmotion.schemas.job import JobListResponse, JobResponse

router = APIRouter()


@router.get("/jobs", response_model=JobListResponse, response_model_exclude_none=True)
async def list_jobs(store: Jobs) -> JobListResponse:
    """List export jobs, newest first."""
    jobs = await store.list()
    return JobListResponse(jobs=[JobResponse.from_job(job) for job in jobs])


@router.get("/jobs/{job_id}", response_model=JobResponse, response_model_exclude_none=True)
async def get_job(job_id: str, store: Jobs) -> JobResponse:
    """
    Poll one export job.

    ``outputUrl`` is present once completed and ``error`` once failed.
    """
    job = await store.get(job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )
    return JobResponse.from_job(job)


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(job_id: str, store: Jobs) -> None:
    """Forget a job. Its video file (if any) is left to expire."""
    if not await store.delete(job_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )
