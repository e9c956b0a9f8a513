"""Heading discovery and anchor id assignment."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from .constants import FALLBACK_SLUG
from .models import HEADING_NAMES, HeadingRecord, HeadingTag, ScanResult
from .slugify import generate_slug

logger = logging.getLogger(__name__)


def resolve_unique_id(candidate: str, used_ids: set[str]) -> str:
    """Return `candidate`, or the first free ``candidate-N`` for N >= 2.

    The first occurrence of a slug is never suffixed. Collisions with ids that
    were themselves produced by suffixing are handled by continuing to count,
    so ``"intro"``, ``"intro"``, ``"intro-2"`` yields ``intro``, ``intro-2``,
    ``intro-2-2``.

    Args:
        candidate: Slug to start from.
        used_ids: Ids already assigned in the current scan. Not modified.

    Returns:
        str: An id that is not in `used_ids`.

    Examples:
        resolve_unique_id("intro", set())  # "intro"
        resolve_unique_id("intro", {"intro", "intro-2"})  # "intro-3"
    """
    if candidate not in used_ids:
        return candidate

    suffix = 2
    while f"{candidate}-{suffix}" in used_ids:
        suffix += 1
    return f"{candidate}-{suffix}"


def scan_headings(tree: BeautifulSoup) -> ScanResult:
    """Assign anchor ids to every heading in `tree` and record them.

    Headings ``h1`` to ``h6`` are visited in document order. Each gets an id
    derived from its text (``"section"`` when the text has no slug), made
    unique within this scan, and written to the element's ``id`` attribute,
    replacing any id it already had.

    Args:
        tree: Parsed document; modified in place.

    Returns:
        ScanResult: The same tree and a fresh list of heading records.

    Examples:
        result = scan_headings(BeautifulSoup("<h2>Intro</h2>", "html.parser"))
        result.records[0].id  # "intro"
    """
    headings = tree.find_all(HEADING_NAMES)
    if not headings:
        return ScanResult(tree=tree, records=[])

    records: list[HeadingRecord] = []
    used_ids: set[str] = set()

    for heading in headings:
        text = heading.get_text()
        candidate = generate_slug(text) or FALLBACK_SLUG

        anchor_id = resolve_unique_id(candidate, used_ids)
        if anchor_id != candidate:
            logger.debug("Heading id %r already used, assigned %r", candidate, anchor_id)
        used_ids.add(anchor_id)

        heading["id"] = anchor_id
        records.append(HeadingRecord(tag=HeadingTag.from_name(heading.name), text=text, id=anchor_id))

    logger.debug("Scanned %d headings", len(records))
    return ScanResult(tree=tree, records=records)


def scan_html(html: str) -> ScanResult:
    """Parse `html` with the standard HTML parser and scan it.

    Args:
        html: HTML document or fragment; malformed markup is tolerated.

    Returns:
        ScanResult: The parsed, id-annotated tree and its heading records.

    Examples:
        scan_html("<h2>A</h2><h2>A</h2>").records[1].id  # "a-2"
    """
    return scan_headings(BeautifulSoup(html, "html.parser"))
