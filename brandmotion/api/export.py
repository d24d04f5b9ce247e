"""Export submission endpoint."""

from fastapi import APIRouter, HTTPException, Request, status

from brandmotion.core.exceptions import ExportRejected
from brandmotion.core.rate_limit import export_rate_limit, limiter
from brandmotion.dependencies import Orchestrator
from brandmotion.schemas.export import ExportRequest
from brandmotion.schemas.job import ExportAcceptedResponse

router = APIRouter()


@router.post(
    "/export",
    response_model=ExportAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
@limiter.limit(export_rate_limit)
async def create_export(
    request: Request,
    payload: ExportRequest,
    orchestrator: Orchestrator,
) -> ExportAcceptedResponse:
    """
    Queue a video export.

    Rendering happens in the background; poll ``checkStatusAt`` for progress.
    Requests with no scenes, more than the scene cap or an unknown aspect
    ratio are rejected with 422 and no job is created.
    """
    try:
        job = await orchestrator.submit(payload)
    except ExportRejected as e:
        raise HTTPException(
            status_code=422,
            detail=e.to_detail(),
        ) from e

    return ExportAcceptedResponse(
        job_id=job.id,
        status=job.status,
        check_status_at=f"/api/jobs/{job.id}",
    )
