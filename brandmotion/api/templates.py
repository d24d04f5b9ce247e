"""Catalog endpoints for the editor: animations, formats, fonts, templates."""

from dataclasses import asdict

from fastapi import APIRouter

from brandmotion.dependencies import Catalog
from brandmotion.schemas.common import CamelModel
from brandmotion.video.constants import FONT_FAMILIES, HEADLINE_FONT_SIZES, TONES
from brandmotion.video.formats import FORMAT_SPECS
from brandmotion.video.templates import TEMPLATES

router = APIRouter()


class AnimationOption(CamelModel):
    id: str
    name: str
    curve: str
    exit: str


class AspectRatioOption(CamelModel):
    id: str
    name: str
    width: int
    height: int


class TemplateSceneOption(CamelModel):
    id: str
    type: str
    label: str
    headline: str
    subtext: str
    animation: str
    duration: str


class TemplateOption(CamelModel):
    id: str
    name: str
    description: str
    scenes: list[TemplateSceneOption]


class TemplatesResponse(CamelModel):
    """Response for /api/templates."""

    animations: list[AnimationOption]
    aspect_ratios: list[AspectRatioOption]
    fonts: list[str]
    text_sizes: list[str]
    tones: list[str]
    templates: list[TemplateOption]


@router.get("/templates", response_model=TemplatesResponse)
async def list_templates(catalog: Catalog) -> TemplatesResponse:
    """
    Everything the editor needs to build pickers.

    Animations are entry presets only; exits are paired automatically.
    """
    return TemplatesResponse(
        animations=[
            AnimationOption(
                id=preset.id,
                name=preset.name,
                curve=preset.curve,
                exit=catalog.lookup_exit(preset.id).id,
            )
            for preset in catalog.entry_presets()
        ],
        aspect_ratios=[
            AspectRatioOption(
                id=spec.aspect_ratio,
                name=spec.name,
                width=spec.width,
                height=spec.height,
            )
            for spec in FORMAT_SPECS.values()
        ],
        fonts=["modern", *FONT_FAMILIES],
        text_sizes=list(HEADLINE_FONT_SIZES["16:9"]),
        tones=list(TONES),
        templates=[
            TemplateOption(
                id=t.id,
                name=t.name,
                description=t.description,
                scenes=[TemplateSceneOption(**asdict(s)) for s in t.scenes],
            )
            for t in TEMPLATES
        ],
    )
