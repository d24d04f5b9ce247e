"""Timeline and live-preview endpoints."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from brandmotion.dependencies import Catalog, Config
from brandmotion.schemas.export import PreviewRequest
from brandmotion.schemas.timeline import TimelineRequest, TimelineResponse
from brandmotion.video.document import synthesize_document
from brandmotion.video.serializers import serialize_preview
from brandmotion.video.timeline import compute_master_timeline

router = APIRouter()


@router.post("/timeline", response_model=TimelineResponse)
async def compute_timeline(payload: TimelineRequest) -> TimelineResponse:
    """Master timeline (integer ms) for a scene list."""
    return TimelineResponse.from_timeline(compute_master_timeline(payload.scenes))


@router.post("/preview", response_class=HTMLResponse)
async def render_preview(payload: PreviewRequest, catalog: Catalog, config: Config) -> HTMLResponse:
    """
    Looping HTML preview of a sequence.

    Uses the same document as the export, so preview and video agree on timing.
    """
    timeline = compute_master_timeline(payload.scenes)
    document = synthesize_document(
        timeline,
        payload.scenes,
        payload.brand_palette,
        payload.aspect_ratio,
        catalog,
        headline_font=config.brand.headline_font,
    )
    html = serialize_preview(document, config.render.preview_loop_pause_ms)
    return HTMLResponse(content=html)
