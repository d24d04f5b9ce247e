"""Output formats: aspect ratios and export quality presets."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping


class AspectRatio(str, Enum):
    """Supported output aspect ratios."""

    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"


class Quality(str, Enum):
    """Export quality levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class FormatSpec:
    """Pixel dimensions for an aspect ratio."""

    name: str
    aspect_ratio: str
    width: int
    height: int


@dataclass(frozen=True)
class QualityPreset:
    """Frame rate and x264 constant rate factor for a quality level."""

    fps: int
    crf: int


FORMAT_SPECS: dict[AspectRatio, FormatSpec] = {
    AspectRatio.LANDSCAPE: FormatSpec(
        name="Landscape",
        aspect_ratio="16:9",
        width=1920,
        height=1080,
    ),
    AspectRatio.PORTRAIT: FormatSpec(
        name="Portrait",
        aspect_ratio="9:16",
        width=1080,
        height=1920,
    ),
    AspectRatio.SQUARE: FormatSpec(
        name="Square",
        aspect_ratio="1:1",
        width=1080,
        height=1080,
    ),
}

QUALITY_PRESETS: dict[Quality, QualityPreset] = {
    Quality.LOW: QualityPreset(fps=24, crf=28),
    Quality.MEDIUM: QualityPreset(fps=30, crf=23),
    Quality.HIGH: QualityPreset(fps=60, crf=18),
}


def find_format_spec(aspect_ratio: str | None) -> FormatSpec | None:
    """Look up dimensions for an aspect ratio; None when unsupported."""
    try:
        return FORMAT_SPECS[AspectRatio(aspect_ratio)]
    except ValueError:
        return None


def get_format_spec(aspect_ratio: str | None) -> FormatSpec:
    """Dimensions for an aspect ratio, defaulting to 16:9."""
    return find_format_spec(aspect_ratio) or FORMAT_SPECS[AspectRatio.LANDSCAPE]


def get_quality_preset(
    quality: str | None,
    overrides: Mapping[str, Mapping[str, int]] | None = None,
) -> QualityPreset:
    """Quality preset for a level (medium when unknown), with config overrides."""
    try:
        level = Quality(quality)
    except ValueError:
        level = Quality.MEDIUM

    preset = QUALITY_PRESETS[level]
    override = (overrides or {}).get(level.value)
    if override:
        preset = replace(
            preset,
            fps=int(override.get("fps", preset.fps)),
            crf=int(override.get("crf", preset.crf)),
        )
    return preset
