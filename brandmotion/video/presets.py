"""Motion preset catalog.

Presets are immutable. The catalog is built once by ``build_catalog()`` at
process start and handed to whatever needs it (synthesizer, API, CLI).
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class PresetType(str, Enum):
    """Whether a preset animates an element in or out."""

    ENTRY = "entry"
    EXIT = "exit"


DEFAULT_ENTRY_PRESET = "fadeIn"
DEFAULT_EXIT_PRESET = "fadeOut"


@dataclass(frozen=True)
class MotionPreset:
    """A named motion style: property ranges plus an easing curve."""

    id: str
    name: str
    type: PresetType
    curve: str
    opacity: tuple[float, float]
    transform: tuple[str, str] | None = None
    stagger_base: float = 0.0

    @property
    def properties(self) -> dict[str, tuple[str, str]]:
        """Animated properties as CSS ``[from, to]`` pairs."""
        props = {"opacity": (_format_number(self.opacity[0]), _format_number(self.opacity[1]))}
        if self.transform:
            props["transform"] = self.transform
        return props


@dataclass(frozen=True)
class PresetCatalog:
    """Read-only lookup of motion presets and entry -> exit pairings."""

    presets: Mapping[str, MotionPreset] = field(default_factory=lambda: MappingProxyType({}))
    exit_pairs: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def lookup_entry(self, preset_id: str | None) -> MotionPreset:
        """Entry preset for an id, falling back to fadeIn."""
        preset = self.presets.get(preset_id or "")
        if preset is None or preset.type != PresetType.ENTRY:
            return self.presets[DEFAULT_ENTRY_PRESET]
        return preset

    def lookup_exit(self, entry_id: str | None) -> MotionPreset:
        """Exit preset paired with an entry id, falling back to fadeOut."""
        exit_id = self.exit_pairs.get(entry_id or "", DEFAULT_EXIT_PRESET)
        return self.presets.get(exit_id, self.presets[DEFAULT_EXIT_PRESET])

    def entry_presets(self) -> list[MotionPreset]:
        """Entry presets in catalog order (for pickers)."""
        return [p for p in self.presets.values() if p.type == PresetType.ENTRY]


# Entry animations ease out, exits ease in
_PRESETS: tuple[MotionPreset, ...] = (
    MotionPreset(
        id="fadeIn",
        name="Fade In",
        type=PresetType.ENTRY,
        curve="cubic-bezier(0, 0, 0.2, 1)",
        opacity=(0, 1),
        stagger_base=0.1,
    ),
    MotionPreset(
        id="slideUp",
        name="Slide Up",
        type=PresetType.ENTRY,
        curve="cubic-bezier(0.16, 1, 0.3, 1)",
        opacity=(0, 1),
        transform=("translateY(60px)", "translateY(0)"),
        stagger_base=0.15,
    ),
    MotionPreset(
        id="slideLeft",
        name="Slide Left",
        type=PresetType.ENTRY,
        curve="cubic-bezier(0.16, 1, 0.3, 1)",
        opacity=(0, 1),
        transform=("translateX(60px)", "translateX(0)"),
        stagger_base=0.1,
    ),
    MotionPreset(
        id="scaleIn",
        name="Scale In",
        type=PresetType.ENTRY,
        curve="cubic-bezier(0.34, 1.56, 0.64, 1)",  # slight overshoot
        opacity=(0, 1),
        transform=("scale(0.8)", "scale(1)"),
        stagger_base=0.05,
    ),
    MotionPreset(
        id="typewriter",
        name="Typewriter",
        type=PresetType.ENTRY,
        curve="steps(1, end)",
        opacity=(0, 1),
    ),
    MotionPreset(
        id="fadeOut",
        name="Fade Out",
        type=PresetType.EXIT,
        curve="cubic-bezier(0.4, 0, 1, 1)",
        opacity=(1, 0),
    ),
    MotionPreset(
        id="slideAway",
        name="Slide Away",
        type=PresetType.EXIT,
        curve="cubic-bezier(0.4, 0, 1, 1)",
        opacity=(1, 0),
        transform=("translateY(0)", "translateY(-40px)"),
    ),
    MotionPreset(
        id="scaleOut",
        name="Scale Out",
        type=PresetType.EXIT,
        curve="cubic-bezier(0.4, 0, 1, 1)",
        opacity=(1, 0),
        transform=("scale(1)", "scale(0.9)"),
    ),
)

_EXIT_PAIRS: dict[str, str] = {
    "fadeIn": "fadeOut",
    "slideUp": "fadeOut",
    "slideLeft": "slideAway",
    "scaleIn": "scaleOut",
    "typewriter": "fadeOut",
}


def build_catalog() -> PresetCatalog:
    """Build the immutable preset catalog."""
    presets = {p.id: p for p in _PRESETS}
    missing = [entry for entry in _entry_ids(presets) if entry not in _EXIT_PAIRS]
    if missing:
        raise ValueError(f"Entry presets without an exit pair: {', '.join(missing)}")
    return PresetCatalog(
        presets=MappingProxyType(presets),
        exit_pairs=MappingProxyType(dict(_EXIT_PAIRS)),
    )


def _entry_ids(presets: dict[str, MotionPreset]) -> list[str]:
    return [pid for pid, p in presets.items() if p.type == PresetType.ENTRY]


def _format_number(value: float) -> str:
    return f"{value:g}"
