from pydantic import ConfigDict

from brandmotion.schemas.common import CamelModel
from brandmotion.schemas.scene import Scene
from brandmotion.video.timeline import MasterTimeline


class TimelineRequest(CamelModel):
    """Request body for /api/timeline."""

    scenes: list[Scene]


class PhaseResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    start: int
    end: int
    duration: int


class PhasesResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    entry: PhaseResponse
    hold: PhaseResponse
    exit: PhaseResponse


class SceneTimingResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    scene_id: str
    start_time: int
    end_time: int
    total_duration: int
    phases: PhasesResponse


class TimelineResponse(CamelModel):
    """Master timeline in integer milliseconds."""

    model_config = ConfigDict(from_attributes=True)

    total_duration: int
    scene_timings: list[SceneTimingResponse]

    @classmethod
    def from_timeline(cls, timeline: MasterTimeline) -> "TimelineResponse":
        return cls.model_validate(timeline)
