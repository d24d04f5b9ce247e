"""Foreground color selection for flat and gradient backgrounds."""

import re

BLACK = "#000000"
WHITE = "#ffffff"

# YIQ brightness at or above this reads as a light background
LIGHT_THRESHOLD = 128

_SHORTHAND_RE = re.compile(r"^#?([a-f\d])([a-f\d])([a-f\d])$", re.IGNORECASE)
_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def resolve_foreground(color: str | None) -> str:
    """
    Pick black or white text for a background color.

    Accepts ``#rgb`` or ``#rrggbb`` (the leading ``#`` is optional). Anything
    else, including CSS gradients and empty values, resolves to white.
    """
    if not isinstance(color, str) or not color:
        return WHITE

    value = _SHORTHAND_RE.sub(r"#\1\1\2\2\3\3", color.strip())
    match = _HEX_RE.match(value)
    if not match:
        return WHITE

    r, g, b = (int(part, 16) for part in match.groups())
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return BLACK if brightness >= LIGHT_THRESHOLD else WHITE
