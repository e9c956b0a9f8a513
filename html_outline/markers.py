"""Outline marker detection and attribute parsing."""

from __future__ import annotations

import html
import re
from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

from .constants import OUTLINE_MARKER

ATTRIBUTE_PATTERN = re.compile(
    r"""(?P<name>[A-Za-z_][\w-]*)\s*=\s*(?:"(?P<double>[^"]*)"|'(?P<single>[^']*)'|(?P<bare>[^\s"'\]]+))"""
)


@dataclass(frozen=True)
class OutlineMarker:
    """A marker occurrence in a document.

    Attributes:
        start: Index of the opening bracket.
        end: Index just past the closing bracket.
        attributes: Attribute values keyed by lower-cased name.
    """

    start: int
    end: int
    attributes: dict[str, str]


@lru_cache(maxsize=16)
def _marker_pattern(marker: str) -> re.Pattern[str]:
    return re.compile(rf"\[{re.escape(marker)}(?P<attributes>\s[^\]]*)?\]")


def contains_marker(content: str, marker: str = OUTLINE_MARKER) -> bool:
    """Cheap check for whether `content` may hold an outline marker.

    Args:
        content: Document text.
        marker: Marker name without brackets.

    Returns:
        bool: True when ``"[" + marker`` occurs in `content`.

    Examples:
        contains_marker("<p>[outline]</p>")  # True
    """
    return f"[{marker}" in content


def parse_marker_attributes(raw: str) -> dict[str, str]:
    """Parse ``name="value"`` pairs from the inside of a marker.

    Values may be double-quoted, single-quoted, or bare words. Names are
    lower-cased; a repeated name keeps its last value. Character references
    are decoded, since markers are read from serialized HTML where ``&``
    appears as ``&amp;``.

    Args:
        raw: Text between the marker name and the closing bracket.

    Returns:
        dict[str, str]: Attribute values keyed by name.

    Examples:
        parse_marker_attributes(' tags="h2,h3" title=\\'\\'')  # {"tags": "h2,h3", "title": ""}
    """
    attributes = {}
    for match in ATTRIBUTE_PATTERN.finditer(raw):
        for group in ("double", "single", "bare"):
            value = match.group(group)
            if value is not None:
                break
        attributes[match.group("name").lower()] = html.unescape(value)
    return attributes


def find_markers(content: str, marker: str = OUTLINE_MARKER) -> Iterator[OutlineMarker]:
    """Yield each outline marker in `content`, in order.

    Args:
        content: Document text.
        marker: Marker name without brackets.

    Yields:
        OutlineMarker: Position and attributes of each occurrence.

    Examples:
        [m.attributes for m in find_markers('[outline tags="h2"]')]  # [{"tags": "h2"}]
    """
    for match in _marker_pattern(marker).finditer(content):
        yield OutlineMarker(
            start=match.start(),
            end=match.end(),
            attributes=parse_marker_attributes(match.group("attributes") or ""),
        )
