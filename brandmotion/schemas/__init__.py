from brandmotion.schemas.export import AudioTrack, ExportRequest, PreviewRequest
from brandmotion.schemas.job import (
    STATUS_LABELS,
    ExportAcceptedResponse,
    Job,
    JobListResponse,
    JobResponse,
    JobStatus,
)
from brandmotion.schemas.scene import (
    BrandPalette,
    ColorBackground,
    GradientBackground,
    ImageBackground,
    Scene,
)
from brandmotion.schemas.timeline import TimelineRequest, TimelineResponse

__all__ = [
    "AudioTrack",
    "ExportAcceptedResponse",
    "ExportRequest",
    "PreviewRequest",
    "STATUS_LABELS",
    "Job",
    "JobListResponse",
    "JobResponse",
    "JobStatus",
    "BrandPalette",
    "ColorBackground",
    "GradientBackground",
    "ImageBackground",
    "Scene",
    "TimelineRequest",
    "TimelineResponse",
]
