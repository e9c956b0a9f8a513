"""Data models for html-outline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from bs4 import BeautifulSoup

from .constants import DEFAULT_TAGS, DEFAULT_TITLE
from .exceptions import UnknownHeadingTagError


class HeadingTag(Enum):
    """The six HTML heading kinds.

    Attributes:
        H1: Most prominent heading.
        H6: Least prominent heading.
    """

    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"

    @property
    def level(self) -> int:
        return _LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> HeadingTag:
        """Look up a heading tag by element name.

        Args:
            name: Tag name such as ``"h2"``; case and surrounding whitespace
                are ignored.

        Returns:
            HeadingTag: The matching member.

        Raises:
            UnknownHeadingTagError: If `name` is not ``h1`` through ``h6``.

        Examples:
            HeadingTag.from_name("H3")  # HeadingTag.H3
        """
        try:
            return cls(name.strip().lower())
        except ValueError as error:
            raise UnknownHeadingTagError(name) from error


_LEVELS = {
    HeadingTag.H1: 1,
    HeadingTag.H2: 2,
    HeadingTag.H3: 3,
    HeadingTag.H4: 4,
    HeadingTag.H5: 5,
    HeadingTag.H6: 6,
}

HEADING_NAMES = [tag.value for tag in HeadingTag]


@dataclass(frozen=True)
class HeadingRecord:
    """One heading found during a scan, in document order.

    Attributes:
        tag: Heading kind of the element.
        text: Flattened text content of the heading.
        id: Anchor identifier assigned to the element, unique within the scan.
    """

    tag: HeadingTag
    text: str
    id: str

    @property
    def level(self) -> int:
        return self.tag.level

    def as_dict(self) -> dict[str, object]:
        return {"tag": self.tag.value, "text": self.text, "id": self.id, "level": self.level}


def parse_allowed_tags(raw: str) -> frozenset[HeadingTag]:
    """Parse a comma-separated tag list such as ``"h2, H3"``.

    Empty items and names that are not heading tags are dropped; they would
    never match a record anyway.

    Args:
        raw: Comma-separated heading tag names.

    Returns:
        frozenset[HeadingTag]: The recognised tags, possibly empty.

    Examples:
        parse_allowed_tags("h2,h3")  # frozenset({HeadingTag.H2, HeadingTag.H3})
        parse_allowed_tags("")  # frozenset()
    """
    allowed = set()
    for name in raw.lower().split(","):
        name = name.strip()
        if not name:
            continue
        try:
            allowed.add(HeadingTag.from_name(name))
        except UnknownHeadingTagError:
            continue
    return frozenset(allowed)


@dataclass(frozen=True)
class RenderOptions:
    """Per-call options for rendering an outline.

    Attributes:
        allowed_tags: Heading kinds to include in the outline.
        title: Text of the title block; an empty string omits the block.
    """

    allowed_tags: frozenset[HeadingTag] = field(default_factory=lambda: parse_allowed_tags(DEFAULT_TAGS))
    title: str = DEFAULT_TITLE

    @classmethod
    def from_attributes(cls, tags: str | None = None, title: str | None = None) -> RenderOptions:
        """Build options from raw marker attribute values.

        Args:
            tags: Comma-separated tag list; defaults to ``"h2,h3"`` when None.
            title: Title text; defaults to ``"Table of Contents"`` when None.

        Returns:
            RenderOptions: Options with defaults applied for missing values.

        Examples:
            RenderOptions.from_attributes(tags="h2,h3,h4", title="")
        """
        return cls(
            allowed_tags=parse_allowed_tags(DEFAULT_TAGS if tags is None else tags),
            title=DEFAULT_TITLE if title is None else title,
        )


@dataclass
class ScanResult:
    """Result of scanning one document.

    Attributes:
        tree: The parsed document, with ids written onto its headings.
        records: Headings found, in document order.
    """

    tree: BeautifulSoup
    records: list[HeadingRecord]
