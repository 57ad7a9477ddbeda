"""Convert raw model text into safe display markup.

Only two constructs are rendered: ``**bold**`` pairs and line breaks. Any
other character that matters to HTML is escaped. The formatter's own output
(``<b>``, ``</b>``, ``<br/>`` and entity references) passes through
unchanged, so formatting already-formatted text is a no-op.
"""

import re

BOLD_MARKER = "**"
BREAK_MARKER = "*"
LINE_BREAK = "<br/>"

_SAFE_TOKEN = re.compile(r"(<b>|</b>|<br/>|&(?:amp|lt|gt|quot|#0?39);)")


def _escape(text: str) -> str:
    # Ampersand first so the entities added below are not escaped again
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def escape_html(text: str) -> str:
    """Escape text for embedding in markup, keeping existing safe tokens."""
    parts = _SAFE_TOKEN.split(text)
    return "".join(part if i % 2 else _escape(part) for i, part in enumerate(parts))


def format_for_display(text: str) -> str:
    """Format raw model text as display-safe HTML.

    Text between successive ``**`` markers is wrapped in ``<b>``. Newlines and
    any leftover single ``*`` become ``<br/>``.

    Args:
        text: Raw accumulated model output.

    Returns:
        HTML fragment safe to render.
    """
    if not text:
        return ""

    segments = text.split(BOLD_MARKER)
    html = "".join(
        f"<b>{escape_html(segment)}</b>" if i % 2 else escape_html(segment)
        for i, segment in enumerate(segments)
    )
    return html.replace("\n", LINE_BREAK).replace(BREAK_MARKER, LINE_BREAK)
