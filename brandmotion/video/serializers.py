"""HTML serialization of render documents.

Two backends share the same markup and style sheet:

- capture: fixed pixel page with no scripts; the frame sampler pauses and
  seeks the animations itself.
- preview: fills the viewport and restarts every animation once the
  sequence has finished plus a short pause.
"""

import html

from brandmotion.video.document import Animation, Element, KeyframesRule, RenderDocument

DEFAULT_LOOP_PAUSE_MS = 500

_PREVIEW_LOOP_SCRIPT = """
(function () {{
  var interval = {interval};
  function restart() {{
    document.getAnimations().forEach(function (animation) {{
      animation.cancel();
      animation.play();
    }});
  }}
  window.setInterval(restart, interval);
}})();
"""


def serialize_capture(document: RenderDocument) -> str:
    """Full HTML page sized to the output resolution, for frame capture."""
    body = {"width": f"{document.width}px", "height": f"{document.height}px"}
    return _render_page(document, body, script=None)


def serialize_preview(document: RenderDocument, loop_pause_ms: int = DEFAULT_LOOP_PAUSE_MS) -> str:
    """Full HTML page for the live preview, looping the sequence."""
    body = {"width": "100vw", "height": "100vh"}
    interval = preview_loop_interval_ms(document, loop_pause_ms)
    script = _PREVIEW_LOOP_SCRIPT.format(interval=interval) if interval else None
    return _render_page(document, body, script=script)


def preview_loop_interval_ms(document: RenderDocument, loop_pause_ms: int = DEFAULT_LOOP_PAUSE_MS) -> int:
    """Milliseconds between preview restarts; 0 when there is nothing to play."""
    if document.total_duration_ms <= 0:
        return 0
    return document.total_duration_ms + loop_pause_ms


def _render_page(document: RenderDocument, body: dict[str, str], script: str | None) -> str:
    css = [
        f"@import url('{document.font_import_url}');",
        _rule(
            "body",
            [
                ("margin", "0"),
                ("padding", "0"),
                ("width", body["width"]),
                ("height", body["height"]),
                ("background-color", document.background_color),
                ("overflow", "hidden"),
                ("position", "relative"),
            ],
        ),
    ]
    css.extend(_keyframes_css(rule) for rule in document.keyframes)
    for scene in document.scenes:
        css.extend(_element_css(scene))

    markup = "\n".join(_element_html(scene, depth=1) for scene in document.scenes)
    script_tag = f"\n<script>{script}</script>" if script else ""

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="UTF-8">\n'
        f'<meta name="viewport" content="width={document.width}, height={document.height}">\n'
        "<style>\n"
        + "\n".join(css)
        + "\n</style>\n"
        "</head>\n"
        "<body>\n"
        f"{markup}{script_tag}\n"
        "</body>\n"
        "</html>\n"
    )


def _element_css(element: Element) -> list[str]:
    declarations = list(element.styles)
    if element.animations:
        declarations.append(("animation", ", ".join(_animation_css(a) for a in element.animations)))

    rules = [_rule(f".{element.class_name}", declarations)] if declarations else []
    for child in element.children:
        rules.extend(_element_css(child))
    return rules


def _element_html(element: Element, depth: int) -> str:
    indent = "  " * depth
    classes = f"{element.role.value} {element.class_name}"
    if not element.children:
        text = html.escape(element.text or "")
        return f'{indent}<div class="{classes}">{text}</div>'

    children = "\n".join(_element_html(child, depth + 1) for child in element.children)
    return f'{indent}<div class="{classes}">\n{children}\n{indent}</div>'


def _keyframes_css(rule: KeyframesRule) -> str:
    frames = " ".join(
        f"{frame.selector} {{ {_declarations(frame.declarations)} }}" for frame in rule.frames
    )
    return f"@keyframes {rule.name} {{ {frames} }}"


def _animation_css(animation: Animation) -> str:
    return (
        f"{animation.keyframes} {_ms(animation.duration_ms)} {animation.easing} "
        f"{_ms(animation.delay_ms)} {animation.fill_mode}"
    )


def _rule(selector: str, declarations: list[tuple[str, str]]) -> str:
    return f"{selector} {{ {_declarations(declarations)} }}"


def _declarations(declarations) -> str:
    return " ".join(f"{prop}: {value};" for prop, value in declarations)


def _ms(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}ms"
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return f"{text}ms"
