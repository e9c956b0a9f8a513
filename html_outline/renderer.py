"""Nested list rendering for heading outlines."""

from __future__ import annotations

import html
from collections.abc import Sequence

from .constants import CONTAINER_CLASS, LIST_CLASS, TITLE_CLASS
from .models import HeadingRecord, RenderOptions


def escape_html(text: str) -> str:
    """Escape text for use as element content."""
    return html.escape(text)


def escape_attr(value: str) -> str:
    """Escape text for use inside a quoted attribute value."""
    return html.escape(value, quote=True)


def render_outline(records: Sequence[HeadingRecord], options: RenderOptions | None = None) -> str:
    """Render heading records as a nested ``<ul>`` outline.

    Records are filtered to `options.allowed_tags`, keeping their order. The
    nesting follows a single current level: a deeper heading opens exactly one
    nested list whatever the gap, a shallower heading closes one list per level
    of difference, and the end of the outline closes a single item and list.
    Outlines that skip levels on the way down therefore produce unbalanced
    closing tags.

    Args:
        records: Heading records in document order. Not modified.
        options: Tag filter and title; defaults to ``h2,h3`` with the
            ``"Table of Contents"`` title.

    Returns:
        str: Outline markup, or ``""`` when no record survives filtering.

    Examples:
        render_outline(scan_html("<h2>A</h2><h3>B</h3>").records)
    """
    options = options or RenderOptions()

    if not records:
        return ""

    items = [record for record in records if record.tag in options.allowed_tags]
    if not items:
        return ""

    output = [f'<div class="{CONTAINER_CLASS}">']
    if options.title:
        output.append(f'<div class="{TITLE_CLASS}">{escape_html(options.title)}</div>')
    output.append(f'<ul class="{LIST_CLASS}">')

    current_level = items[0].level
    first = True

    for item in items:
        level = item.level

        if first:
            current_level = level
            first = False
        elif level > current_level:
            output.append("\n<ul>")
        elif level < current_level:
            output.append("</ul></li>" * (current_level - level))
        else:
            output.append("</li>\n")

        output.append(f'<li><a href="#{escape_attr(item.id)}">{escape_html(item.text)}</a>')
        current_level = level

    output.append("</li></ul>")
    output.append("</div>")

    return "".join(output)
