"""Animation timeline engine and export pipeline for brand videos."""

from brandmotion.video.formats import AspectRatio, Quality, get_format_spec
from brandmotion.video.presets import PresetCatalog, build_catalog
from brandmotion.video.timeline import MasterTimeline, compute_master_timeline

__all__ = [
    "AspectRatio",
    "Quality",
    "get_format_spec",
    "PresetCatalog",
    "build_catalog",
    "MasterTimeline",
    "compute_master_timeline",
]
