import math
from typing import Annotated, Any, Literal
from uuid import uuid4

from pydantic import Field, field_validator

from brandmotion.schemas.common import CamelModel
from brandmotion.video.constants import (
    DEFAULT_ACCENT,
    DEFAULT_OVERLAY,
    DEFAULT_PRIMARY,
    DEFAULT_SECONDARY,
)
from brandmotion.video.timeline import round_half_up

BACKGROUND_TYPES = ("color", "gradient", "image")


class ColorBackground(CamelModel):
    """Flat color. No value means the brand secondary color."""

    type: Literal["color"] = "color"
    value: str | None = None


class GradientBackground(CamelModel):
    """CSS gradient string, used as-is."""

    type: Literal["gradient"]
    value: str | None = None


class ImageBackground(CamelModel):
    """Photo background with a dark overlay and optional blur / slow zoom."""

    type: Literal["image"]
    url: str | None = None
    overlay: str = DEFAULT_OVERLAY  # low | medium | high
    blur: bool = False
    motion: bool = False


Background = Annotated[
    ColorBackground | GradientBackground | ImageBackground,
    Field(discriminator="type"),
]


class Scene(CamelModel):
    """One scene of a brand video."""

    id: str = Field(default_factory=lambda: uuid4().hex[:8])
    headline: str = ""
    subtext: str | None = None
    animation: str | None = None  # entry preset id
    duration: float | str | None = None  # seconds, or short | medium | long
    background: Background | None = None
    text_align: str | None = None
    text_size: str | None = None
    font_family: str | None = None
    text_color: str | None = None

    @field_validator("headline", mode="before")
    @classmethod
    def headline_not_null(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("background", mode="before")
    @classmethod
    def untagged_background_is_color(cls, v: Any) -> Any:
        if isinstance(v, dict) and v.get("type") not in BACKGROUND_TYPES:
            return {**v, "type": "color"}
        return v

    @field_validator("duration")
    @classmethod
    def duration_positive(cls, v: float | str | None) -> float | str | None:
        if isinstance(v, (int, float)) and (not math.isfinite(v) or v <= 0):
            raise ValueError("duration must be a positive number of seconds")
        if isinstance(v, (int, float)) and round_half_up(v * 1000) < 1:
            raise ValueError("duration must be at least 1 millisecond once rounded")
        return v


class BrandPalette(CamelModel):
    """Three-color brand palette plus an optional headline font."""

    primary: str = DEFAULT_PRIMARY
    secondary: str = DEFAULT_SECONDARY
    accent: str = DEFAULT_ACCENT
    headline_font: str | None = None
