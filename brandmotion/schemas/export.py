from pathlib import Path

import yaml
from pydantic import Field

from brandmotion.schemas.common import CamelModel
from brandmotion.schemas.scene import BrandPalette, Scene
from brandmotion.video.constants import DEFAULT_AUDIO_VOLUME


class AudioTrack(CamelModel):
    """Background music sent inline as a base64 data URL."""

    data_url: str
    volume: float = Field(default=DEFAULT_AUDIO_VOLUME, ge=0.0, le=2.0)
    fade: bool = True


class ExportRequest(CamelModel):
    """Everything needed to render one brand video.

    ``scenes`` and ``aspect_ratio`` are checked at intake rather than by the
    schema, so a bad request gets a structured rejection with a reason code.
    """

    brand_palette: BrandPalette = Field(default_factory=BrandPalette)
    scenes: list[Scene] | None = None
    aspect_ratio: str = "16:9"
    quality: str = "medium"
    audio: AudioTrack | None = None

    @classmethod
    def from_yaml(cls, path: Path) -> "ExportRequest":
        """Load a scene file (YAML with brandPalette, aspectRatio, scenes)."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)


class PreviewRequest(CamelModel):
    """Request body for /api/preview."""

    brand_palette: BrandPalette = Field(default_factory=BrandPalette)
    scenes: list[Scene] = Field(default_factory=list)
    aspect_ratio: str = "16:9"

