"""Use-case templates: ready-made story structures to start a video from."""

from dataclasses import dataclass

from brandmotion.schemas.scene import Scene


@dataclass(frozen=True)
class TemplateScene:
    id: str
    type: str  # intro | message | highlight | cta
    label: str
    headline: str
    subtext: str
    animation: str
    duration: str


@dataclass(frozen=True)
class UseCaseTemplate:
    id: str
    name: str
    description: str
    default_duration: str
    scenes: tuple[TemplateScene, ...]

    def to_scenes(self) -> list[Scene]:
        """Editable scenes for this template."""
        return [
            Scene(
                id=s.id,
                headline=s.headline,
                subtext=s.subtext or None,
                animation=s.animation,
                duration=s.duration,
            )
            for s in self.scenes
        ]


TEMPLATES: tuple[UseCaseTemplate, ...] = (
    UseCaseTemplate(
        id="brand-intro",
        name="Brand Intro",
        description="Introduce your brand, logo, and tagline in 15 seconds.",
        default_duration="medium",
        scenes=(
            TemplateScene(
                id="s1",
                type="intro",
                label="Logo Reveal",
                headline="Welcome to",
                subtext="Your Brand Name",
                animation="scaleIn",
                duration="medium",
            ),
            TemplateScene(
                id="s2",
                type="message",
                label="Mission Statement",
                headline="We create future",
                subtext="Building the next generation of tools.",
                animation="slideUp",
                duration="medium",
            ),
            TemplateScene(
                id="s3",
                type="cta",
                label="Website CTA",
                headline="Visit us today",
                subtext="www.example.com",
                animation="fadeIn",
                duration="long",
            ),
        ),
    ),
    UseCaseTemplate(
        id="product-launch",
        name="Product Launch",
        description="Showcase a new feature or product release.",
        default_duration="short",
        scenes=(
            TemplateScene(
                id="s1",
                type="intro",
                label="The Problem",
                headline="Tired of waiting?",
                subtext="",
                animation="slideUp",
                duration="short",
            ),
            TemplateScene(
                id="s2",
                type="highlight",
                label="The Solution",
                headline="Meet SpeedTool",
                subtext="10x faster workflow.",
                animation="scaleIn",
                duration="medium",
            ),
            TemplateScene(
                id="s3",
                type="highlight",
                label="Key Benefit",
                headline="Save hours daily",
                subtext="Automate boring tasks.",
                animation="slideLeft",
                duration="medium",
            ),
            TemplateScene(
                id="s4",
                type="cta",
                label="Call to Action",
                headline="Get it now",
                subtext="Link in bio",
                animation="fadeIn",
                duration="medium",
            ),
        ),
    ),
)


def get_template(template_id: str) -> UseCaseTemplate | None:
    """Find a template by id."""
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None
