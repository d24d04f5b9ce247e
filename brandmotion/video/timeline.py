"""Scene timeline math.

Every scene gets an integer-millisecond schedule split into entry (20%),
hold (60%) and exit (20%) phases. Scenes are laid end to end starting at 0.
Both the preview and the frame capture read the same schedule, so the
results here must be exact and deterministic.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Protocol

from brandmotion.video.constants import (
    DEFAULT_SCENE_DURATION_MS,
    ENTRY_RATIO,
    EXIT_RATIO,
    SCENE_DURATIONS,
)


class TimedScene(Protocol):
    """Anything with an id and a duration (seconds or a duration token)."""

    id: str
    duration: float | str | None


@dataclass(frozen=True)
class Phase:
    """A phase window relative to the scene start (ms)."""

    start: int
    end: int
    duration: int


@dataclass(frozen=True)
class ScenePhases:
    entry: Phase
    hold: Phase
    exit: Phase


@dataclass(frozen=True)
class SceneTiming:
    """Absolute schedule of one scene (ms)."""

    scene_id: str
    start_time: int
    end_time: int
    total_duration: int
    phases: ScenePhases

    @property
    def exit_start(self) -> int:
        """Absolute time the exit phase begins."""
        return self.start_time + self.phases.exit.start


@dataclass(frozen=True)
class MasterTimeline:
    total_duration: int
    scene_timings: tuple[SceneTiming, ...] = ()


def round_half_up(value: float) -> int:
    """Round halves away from zero for positive values (2.5 -> 3, not 2)."""
    return math.floor(value + 0.5)


def resolve_duration_ms(duration: float | str | None) -> int:
    """Scene duration in ms: numeric seconds win, then tokens, then 5000."""
    if isinstance(duration, (int, float)) and not isinstance(duration, bool):
        return round_half_up(duration * 1000)
    if isinstance(duration, str):
        return SCENE_DURATIONS.get(duration, DEFAULT_SCENE_DURATION_MS)
    return DEFAULT_SCENE_DURATION_MS


def compute_scene_timing(scene: TimedScene, start_offset_ms: int = 0) -> SceneTiming:
    """Schedule one scene starting at ``start_offset_ms``."""
    total = resolve_duration_ms(scene.duration)

    entry = round_half_up(total * ENTRY_RATIO)
    exit_ = round_half_up(total * EXIT_RATIO)
    hold = total - entry - exit_

    phases = ScenePhases(
        entry=Phase(start=0, end=entry, duration=entry),
        hold=Phase(start=entry, end=entry + hold, duration=hold),
        exit=Phase(start=entry + hold, end=total, duration=exit_),
    )
    return SceneTiming(
        scene_id=scene.id,
        start_time=start_offset_ms,
        end_time=start_offset_ms + total,
        total_duration=total,
        phases=phases,
    )


def compute_master_timeline(scenes: Iterable[TimedScene]) -> MasterTimeline:
    """Lay scenes end to end. An empty list gives a zero-length timeline."""
    timings: list[SceneTiming] = []
    offset = 0
    for scene in scenes:
        timing = compute_scene_timing(scene, offset)
        timings.append(timing)
        offset = timing.end_time

    return MasterTimeline(total_duration=offset, scene_timings=tuple(timings))
