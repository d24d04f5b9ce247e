"""Shared constants for timeline math and render document synthesis."""

# Duration tokens (milliseconds)
SCENE_DURATIONS: dict[str, int] = {
    "short": 3000,
    "medium": 5000,
    "long": 7000,
}
DEFAULT_SCENE_DURATION_MS = 5000

# Phase split of every scene: entry 20%, hold 60% (absorbs rounding), exit 20%
ENTRY_RATIO = 0.2
EXIT_RATIO = 0.2

# Subtext entry lags the headline by this fraction of the entry phase
SUBTEXT_ENTRY_LAG = 0.5

# Font sizes keyed by aspect ratio then text size
HEADLINE_FONT_SIZES: dict[str, dict[str, str]] = {
    "16:9": {"small": "1.5rem", "medium": "2.5rem", "large": "4rem", "xl": "6rem"},
    "9:16": {"small": "1.2rem", "medium": "2rem", "large": "3rem", "xl": "4rem"},
    "1:1": {"small": "1.5rem", "medium": "2.5rem", "large": "4rem", "xl": "6rem"},
}
SUBTEXT_FONT_SIZES: dict[str, dict[str, str]] = {
    "16:9": {"small": "1rem", "medium": "1.5rem", "large": "2rem", "xl": "3rem"},
    "9:16": {"small": "0.8rem", "medium": "1.2rem", "large": "1.5rem", "xl": "2rem"},
    "1:1": {"small": "1rem", "medium": "1.5rem", "large": "2rem", "xl": "3rem"},
}
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_TEXT_SIZE = "medium"

# Font families; "modern" uses the brand headline font
DEFAULT_HEADLINE_FONT = "Inter"
FONT_FAMILIES: dict[str, str] = {
    "elegant": "'Playfair Display', serif",
    "tech": "'Fira Code', monospace",
    "display": "'Bebas Neue', sans-serif",
}
SUBTEXT_FONT = "'Inter', sans-serif"
FONT_IMPORT_URL = (
    "https://fonts.googleapis.com/css2?family=Inter:wght@400;700"
    "&family=Playfair+Display:wght@700&family=Fira+Code:wght@400"
    "&family=Bebas+Neue&display=swap"
)

# Text alignment -> flex cross-axis alignment
TEXT_ALIGNMENTS: dict[str, str] = {
    "left": "flex-start",
    "center": "center",
    "right": "flex-end",
}
DEFAULT_TEXT_ALIGN = "center"

# Image backgrounds
OVERLAY_OPACITIES: dict[str, float] = {
    "low": 0.2,
    "medium": 0.4,
    "high": 0.7,
}
DEFAULT_OVERLAY = "medium"
IMAGE_BLUR = "4px"
IMAGE_BLEED = "-20px"
KEN_BURNS_SCALE = (1.0, 1.1)
IMAGE_TEXT_SHADOW = "0 2px 12px rgba(0, 0, 0, 0.6)"

# Foreground palettes
LIGHT_TEXT = ("#ffffff", "#e4e4e7")  # headline, subtext on dark backgrounds
DARK_TEXT = ("#000000", "#18181b")  # headline, subtext on light backgrounds

# Brand defaults
DEFAULT_PRIMARY = "#0ea5e9"
DEFAULT_SECONDARY = "#0f172a"
DEFAULT_ACCENT = "#f59e0b"

# Brand tones (speed and spacing multipliers); descriptive only
TONES: dict[str, dict[str, float | bool]] = {
    "minimal": {"speed": 1.0, "spacing": 1.2, "rough": False},
    "bold": {"speed": 1.2, "spacing": 0.9, "rough": False},
    "premium": {"speed": 0.8, "spacing": 1.4, "rough": False},
    "energetic": {"speed": 1.5, "spacing": 1.0, "rough": True},
}

# Frame capture
FRAME_FILENAME_PATTERN = "frame_%05d.png"
AUDIO_FADE_IN_SECONDS = 0.5
AUDIO_FADE_OUT_SECONDS = 1.0
DEFAULT_AUDIO_VOLUME = 0.5
