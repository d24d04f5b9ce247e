"""Render document synthesis.

Turns a master timeline plus scene content into a structured document: a
tree of styled, timed elements and the keyframe rules they reference. The
tree says nothing about HTML; ``serializers`` turns it into a page for the
live preview or for frame capture, so both play exactly the same schedule.

Every scene is an absolutely positioned layer that is invisible outside its
own ``[start, start + duration)`` window. Inside it, the headline (and the
subtext, slightly later) run the entry preset over the entry phase and the
paired exit preset over the exit phase.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from brandmotion.schemas.scene import BrandPalette, ImageBackground, Scene
from brandmotion.video.constants import (
    DARK_TEXT,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_HEADLINE_FONT,
    DEFAULT_OVERLAY,
    DEFAULT_TEXT_ALIGN,
    DEFAULT_TEXT_SIZE,
    FONT_FAMILIES,
    FONT_IMPORT_URL,
    HEADLINE_FONT_SIZES,
    IMAGE_BLEED,
    IMAGE_BLUR,
    IMAGE_TEXT_SHADOW,
    KEN_BURNS_SCALE,
    LIGHT_TEXT,
    OVERLAY_OPACITIES,
    SUBTEXT_ENTRY_LAG,
    SUBTEXT_FONT,
    SUBTEXT_FONT_SIZES,
    TEXT_ALIGNMENTS,
)
from brandmotion.video.contrast import BLACK, resolve_foreground
from brandmotion.video.formats import get_format_spec
from brandmotion.video.presets import MotionPreset, PresetCatalog
from brandmotion.video.timeline import MasterTimeline, SceneTiming

Declarations = tuple[tuple[str, str], ...]

SCENE_VISIBILITY_KEYFRAMES = "scene-visibility"

# Characters that could end a declaration or escape the style element
_UNSAFE_CSS_RE = re.compile(r"[;{}<>\\\n\r]")


class ElementRole(str, Enum):
    SCENE = "scene"
    BACKGROUND = "background"
    OVERLAY = "overlay"
    CONTENT = "content"
    HEADLINE = "headline"
    SUBTEXT = "subtext"


@dataclass(frozen=True)
class Keyframe:
    selector: str  # e.g. "0%" or "0%, 99%"
    declarations: Declarations


@dataclass(frozen=True)
class KeyframesRule:
    name: str
    frames: tuple[Keyframe, ...]


@dataclass(frozen=True)
class Animation:
    """A keyframes reference scheduled on the document clock (ms)."""

    keyframes: str
    duration_ms: float
    delay_ms: float
    easing: str
    fill_mode: str = "forwards"


@dataclass(frozen=True)
class Element:
    role: ElementRole
    class_name: str
    styles: Declarations = ()
    animations: tuple[Animation, ...] = ()
    children: tuple["Element", ...] = ()
    text: str | None = None

    def style(self, name: str) -> str | None:
        for prop, value in self.styles:
            if prop == name:
                return value
        return None

    def find(self, role: ElementRole) -> "Element | None":
        """First descendant (or self) with the given role."""
        if self.role == role:
            return self
        for child in self.children:
            found = child.find(role)
            if found is not None:
                return found
        return None


@dataclass(frozen=True)
class RenderDocument:
    """Styled, timed element tree for a whole sequence."""

    width: int
    height: int
    aspect_ratio: str
    total_duration_ms: int
    keyframes: tuple[KeyframesRule, ...] = ()
    scenes: tuple[Element, ...] = ()
    font_import_url: str = FONT_IMPORT_URL
    background_color: str = "#000"


@dataclass(frozen=True)
class _BackgroundLayers:
    elements: tuple[Element, ...]
    keyframes: tuple[KeyframesRule, ...]
    is_image: bool
    fill: str  # flat color or gradient when not an image


def synthesize_document(
    timeline: MasterTimeline,
    scenes: Sequence[Scene],
    palette: BrandPalette,
    aspect_ratio: str,
    catalog: PresetCatalog,
    headline_font: str | None = None,
) -> RenderDocument:
    """
    Build the render document for a timeline.

    ``scenes`` must be the list the timeline was computed from; timings and
    scenes are paired by position.
    """
    spec = get_format_spec(aspect_ratio)
    font = palette.headline_font or headline_font or DEFAULT_HEADLINE_FONT

    keyframes: list[KeyframesRule] = [_visibility_keyframes()]
    elements: list[Element] = []
    for index, (timing, scene) in enumerate(zip(timeline.scene_timings, scenes)):
        element, scene_keyframes = _build_scene(
            index, timing, scene, palette, spec.aspect_ratio, catalog, font
        )
        elements.append(element)
        keyframes.extend(scene_keyframes)

    return RenderDocument(
        width=spec.width,
        height=spec.height,
        aspect_ratio=spec.aspect_ratio,
        total_duration_ms=timeline.total_duration,
        keyframes=tuple(keyframes),
        scenes=tuple(elements),
    )


def _build_scene(
    index: int,
    timing: SceneTiming,
    scene: Scene,
    palette: BrandPalette,
    aspect_ratio: str,
    catalog: PresetCatalog,
    headline_font: str,
) -> tuple[Element, list[KeyframesRule]]:
    scene_class = f"scene-{index}"
    entry = catalog.lookup_entry(scene.animation)
    exit_ = catalog.lookup_exit(entry.id)

    entry_ms = timing.phases.entry.duration
    exit_ms = timing.phases.exit.duration
    start = timing.start_time

    background = _background_layers(scene, scene_class, timing, palette)
    keyframes = list(background.keyframes)

    headline_entry = f"{scene_class}-headline-entry"
    headline_exit = f"{scene_class}-headline-exit"
    keyframes.append(_preset_keyframes(headline_entry, entry))
    keyframes.append(_preset_keyframes(headline_exit, exit_))
    exit_animation = Animation(headline_exit, exit_ms, timing.exit_start, exit_.curve)

    headline_color, subtext_color = _text_colors(scene, background)
    shadow = (("text-shadow", IMAGE_TEXT_SHADOW),) if background.is_image else ()
    size_key = scene.text_size or DEFAULT_TEXT_SIZE

    text_elements = [
        Element(
            role=ElementRole.HEADLINE,
            class_name=f"{scene_class}-headline",
            text=scene.headline,
            styles=(
                ("font-family", _font_family(scene.font_family, headline_font)),
                ("font-size", _font_size(HEADLINE_FONT_SIZES, aspect_ratio, size_key)),
                ("font-weight", "700"),
                ("color", headline_color),
                ("margin-bottom", "20px"),
                ("opacity", "0"),
                ("line-height", "1.1"),
                ("white-space", "pre-wrap"),
            )
            + shadow,
            animations=(
                Animation(headline_entry, entry_ms, start, entry.curve),
                exit_animation,
            ),
        )
    ]

    if scene.subtext:
        subtext_entry = f"{scene_class}-subtext-entry"
        keyframes.append(_preset_keyframes(subtext_entry, entry))
        text_elements.append(
            Element(
                role=ElementRole.SUBTEXT,
                class_name=f"{scene_class}-subtext",
                text=scene.subtext,
                styles=(
                    ("font-family", SUBTEXT_FONT),
                    ("font-size", _font_size(SUBTEXT_FONT_SIZES, aspect_ratio, size_key)),
                    ("font-weight", "400"),
                    ("color", subtext_color),
                    ("opacity", "0"),
                    ("white-space", "pre-wrap"),
                )
                + shadow,
                animations=(
                    Animation(
                        subtext_entry,
                        entry_ms,
                        start + entry_ms * SUBTEXT_ENTRY_LAG,
                        entry.curve,
                    ),
                    exit_animation,
                ),
            )
        )

    text_align = scene.text_align if scene.text_align in TEXT_ALIGNMENTS else DEFAULT_TEXT_ALIGN
    content = Element(
        role=ElementRole.CONTENT,
        class_name=f"{scene_class}-content",
        styles=(
            ("position", "relative"),
            ("z-index", "2"),
            ("display", "flex"),
            ("flex-direction", "column"),
            ("align-items", TEXT_ALIGNMENTS[text_align]),
            ("text-align", text_align),
            ("width", "100%"),
            ("max-width", "1200px"),
        ),
        children=tuple(text_elements),
    )

    # Held opaque for the whole window, then dropped at the last instant
    scene_element = Element(
        role=ElementRole.SCENE,
        class_name=scene_class,
        styles=(
            ("position", "absolute"),
            ("inset", "0"),
            ("display", "flex"),
            ("flex-direction", "column"),
            ("justify-content", "center"),
            ("align-items", "center"),
            ("opacity", "0"),
            ("z-index", str(index + 1)),
            ("overflow", "hidden"),
            ("padding", "50px"),
        ),
        animations=(
            # No fill: the base opacity 0 applies before and after the window
            Animation(SCENE_VISIBILITY_KEYFRAMES, timing.total_duration, start, "linear", "none"),
        ),
        children=background.elements + (content,),
    )
    return scene_element, keyframes


def _background_layers(
    scene: Scene,
    scene_class: str,
    timing: SceneTiming,
    palette: BrandPalette,
) -> _BackgroundLayers:
    bg = scene.background
    bg_class = f"{scene_class}-bg"

    if isinstance(bg, ImageBackground) and bg.url:
        styles: Declarations = (
            ("position", "absolute"),
            ("inset", IMAGE_BLEED),  # bleed so blur and zoom never show edges
            ("background-image", _css_url(bg.url)),
            ("background-size", "cover"),
            ("background-position", "center"),
            ("z-index", "0"),
        )
        if bg.blur:
            styles += (("filter", f"blur({IMAGE_BLUR})"),)

        keyframes: tuple[KeyframesRule, ...] = ()
        animations: tuple[Animation, ...] = ()
        if bg.motion:
            zoom = f"{scene_class}-zoom"
            keyframes = (_zoom_keyframes(zoom),)
            animations = (
                Animation(zoom, timing.total_duration, timing.start_time, "ease-in-out"),
            )

        opacity = OVERLAY_OPACITIES.get(bg.overlay, OVERLAY_OPACITIES[DEFAULT_OVERLAY])
        overlay = Element(
            role=ElementRole.OVERLAY,
            class_name=f"{scene_class}-overlay",
            styles=(
                ("position", "absolute"),
                ("inset", "0"),
                ("background-color", "#000"),
                ("opacity", f"{opacity:g}"),
                ("z-index", "1"),
            ),
        )
        image = Element(
            role=ElementRole.BACKGROUND,
            class_name=bg_class,
            styles=styles,
            animations=animations,
        )
        return _BackgroundLayers(
            elements=(image, overlay), keyframes=keyframes, is_image=True, fill=""
        )

    # Flat color or gradient; image without a URL falls back to the palette
    fill = None
    if bg is not None and not isinstance(bg, ImageBackground):
        fill = bg.value
    fill = _sanitize_css(fill or palette.secondary)

    element = Element(
        role=ElementRole.BACKGROUND,
        class_name=bg_class,
        styles=(
            ("position", "absolute"),
            ("inset", "0"),
            ("background", fill),
            ("z-index", "0"),
        ),
    )
    return _BackgroundLayers(elements=(element,), keyframes=(), is_image=False, fill=fill)


def _text_colors(scene: Scene, background: _BackgroundLayers) -> tuple[str, str]:
    if background.is_image:
        headline, subtext = LIGHT_TEXT
    elif resolve_foreground(background.fill) == BLACK:
        headline, subtext = DARK_TEXT
    else:
        headline, subtext = LIGHT_TEXT

    if scene.text_color:
        override = _sanitize_css(scene.text_color)
        return override, override
    return headline, subtext


def _font_family(family: str | None, headline_font: str) -> str:
    if family in FONT_FAMILIES:
        return FONT_FAMILIES[family]
    # "modern" and anything unknown use the brand headline font
    name = _sanitize_css(headline_font).replace("'", "").replace('"', "")
    return f"'{name or DEFAULT_HEADLINE_FONT}', sans-serif"


def _font_size(table: dict[str, dict[str, str]], aspect_ratio: str, size: str) -> str:
    return table.get(aspect_ratio, {}).get(size) or table[DEFAULT_ASPECT_RATIO][DEFAULT_TEXT_SIZE]


def _preset_keyframes(name: str, preset: MotionPreset) -> KeyframesRule:
    props = preset.properties
    opacity = props["opacity"]
    transform = props.get("transform", ("none", "none"))
    return KeyframesRule(
        name=name,
        frames=(
            Keyframe("0%", (("opacity", opacity[0]), ("transform", transform[0]))),
            Keyframe("100%", (("opacity", opacity[1]), ("transform", transform[1]))),
        ),
    )


def _zoom_keyframes(name: str) -> KeyframesRule:
    start, end = KEN_BURNS_SCALE
    return KeyframesRule(
        name=name,
        frames=(
            Keyframe("0%", (("transform", f"scale({start:g})"),)),
            Keyframe("100%", (("transform", f"scale({end:g})"),)),
        ),
    )


def _visibility_keyframes() -> KeyframesRule:
    return KeyframesRule(
        name=SCENE_VISIBILITY_KEYFRAMES,
        frames=(
            Keyframe("0%, 100%", (("opacity", "1"),)),
        ),
    )


def _sanitize_css(value: str) -> str:
    return _UNSAFE_CSS_RE.sub("", value).strip()


def _css_url(url: str) -> str:
    escaped = url.replace("\\", "%5C").replace("'", "%27").replace("<", "%3C").replace(">", "%3E")
    escaped = escaped.replace("\n", "").replace("\r", "")
    return f"url('{escaped}')"

