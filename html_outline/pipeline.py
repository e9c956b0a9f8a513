"""Document-level wiring: heading ids, marker expansion, and styles.

A page render goes through two steps. `prepare_content` scans the primary
document once, writing anchor ids onto its headings and returning the heading
records. `expand_markers` then replaces every outline marker with an outline
rendered from those records. `process_content` runs both.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from .config import OutlineConfig
from .constants import CONTAINER_CLASS, ENCODING_DECLARATION, OUTLINE_MARKER
from .markers import contains_marker, find_markers
from .models import HeadingRecord, RenderOptions
from .renderer import render_outline
from .scanner import scan_headings

logger = logging.getLogger(__name__)

STYLE_ELEMENT_ID = "outline-styles"

OUTLINE_STYLES = """
.outline-container {
    background: #f9f9f9;
    border: 1px solid #e1e1e1;
    padding: 15px;
    margin: 20px 0;
    display: inline-block;
    min-width: 250px;
    border-radius: 4px;
}
.outline-title {
    font-weight: bold;
    margin-bottom: 10px;
    font-size: 1.1em;
}
.outline-list, .outline-list ul {
    list-style: none;
    padding-left: 0;
    margin: 0;
}
.outline-list ul {
    padding-left: 20px;
}
.outline-list li {
    margin-bottom: 5px;
    line-height: 1.4;
}
.outline-list a {
    text-decoration: none;
    color: inherit;
    border-bottom: 1px solid transparent;
}
.outline-list a:hover {
    border-bottom-color: currentColor;
    opacity: 0.8;
}
"""

_HEAD_CLOSE_PATTERN = re.compile(r"</head\s*>", re.IGNORECASE)


@dataclass
class PreparedContent:
    """Content after the heading pass.

    Attributes:
        html: Document with ids on its headings, or the input unchanged.
        records: Headings found, in document order; empty when skipped.
    """

    html: str
    records: list[HeadingRecord] = field(default_factory=list)


def prepare_content(content: str, is_primary: bool, marker: str = OUTLINE_MARKER) -> PreparedContent:
    """Assign heading ids in the primary document and collect its headings.

    Parsing is skipped unless `is_primary` is true and `content` contains an
    outline marker; the input is then returned as is with no records.

    Args:
        content: Rendered HTML of the page body.
        is_primary: Whether this is the main document of the page render.
        marker: Marker name without brackets.

    Returns:
        PreparedContent: Serialized document and heading records.

    Examples:
        prepared = prepare_content("[outline]<h2>Intro</h2>", is_primary=True)
        prepared.records[0].id  # "intro"
    """
    if not is_primary or not contains_marker(content, marker):
        return PreparedContent(html=content)

    result = scan_headings(BeautifulSoup(content, "html.parser"))
    if not result.records:
        logger.debug("No headings found, leaving content unchanged")
        return PreparedContent(html=content)

    html = str(result.tree).replace(ENCODING_DECLARATION, "")
    return PreparedContent(html=html, records=result.records)


def expand_markers(
    content: str, records: Sequence[HeadingRecord], config: OutlineConfig | None = None
) -> str:
    """Replace every outline marker in `content` with a rendered outline.

    Marker attributes ``tags`` and ``title`` override the configured defaults,
    so several markers can show different levels of the same headings.

    Args:
        content: Document text containing markers.
        records: Heading records from `prepare_content`. Not modified.
        config: Marker name and attribute defaults.

    Returns:
        str: Content with markers replaced; markers with nothing to show are
            removed.

    Examples:
        expand_markers('[outline tags="h2"]', records)
    """
    config = config or OutlineConfig()

    parts = []
    position = 0
    for marker in find_markers(content, config.marker):
        options = RenderOptions.from_attributes(
            tags=marker.attributes.get("tags", config.tags),
            title=marker.attributes.get("title", config.title),
        )
        parts.append(content[position : marker.start])
        parts.append(render_outline(records, options))
        position = marker.end
    parts.append(content[position:])

    return "".join(parts)


def render_style_block() -> str:
    """Return the outline stylesheet as a ``<style>`` element."""
    return f'<style id="{STYLE_ELEMENT_ID}">{OUTLINE_STYLES}</style>'


def inject_styles(html: str) -> str:
    """Insert the outline stylesheet once into `html`.

    The block goes before ``</head>`` when the document has a head, otherwise
    at the very start. Documents that already carry it are returned unchanged.

    Args:
        html: Document text.

    Returns:
        str: Document with the stylesheet present exactly once.
    """
    if f'id="{STYLE_ELEMENT_ID}"' in html:
        return html

    match = _HEAD_CLOSE_PATTERN.search(html)
    if match is None:
        return render_style_block() + html
    return html[: match.start()] + render_style_block() + html[match.start() :]


def process_content(content: str, is_primary: bool = True, config: OutlineConfig | None = None) -> str:
    """Run the heading pass and expand outline markers for one page render.

    Args:
        content: Rendered HTML of the page body.
        is_primary: Whether this is the main document of the page render.
            Secondary documents get no heading ids and their markers render
            as nothing.
        config: Marker name, defaults, and style injection settings.

    Returns:
        str: The processed document.

    Examples:
        process_content('[outline title=""]<h2>A</h2><h3>B</h3>')
    """
    config = config or OutlineConfig()

    if not contains_marker(content, config.marker):
        return content

    prepared = prepare_content(content, is_primary, config.marker)
    html = expand_markers(prepared.html, prepared.records, config)

    if config.include_styles and CONTAINER_CLASS in html:
        html = inject_styles(html)

    return html
