"""Slug generation for heading anchors."""

from __future__ import annotations

import re
import unicodedata


def generate_slug(text: str) -> str:
    """Generate a URL-fragment-safe slug from heading text.

    Transliterates to ASCII, lowercases, keeps letters, digits, hyphens and
    underscores, and collapses runs of whitespace and hyphens to one hyphen.
    Unlike an anchor id, the slug may be empty; callers pick a fallback.

    Args:
        text: The heading text to convert.

    Returns:
        str: Hyphen-separated slug, or ``""`` when nothing usable remains.

    Examples:
        generate_slug("Hello World")  # "hello-world"
        generate_slug("What's New?")  # "whats-new"
        generate_slug("Café au lait")  # "cafe-au-lait"
        generate_slug("???")  # ""
    """
    # Step 1: Normalize unicode and drop what has no ASCII form
    normalized = unicodedata.normalize("NFKD", text)
    slug = normalized.encode("ascii", "ignore").decode("ascii")

    # Step 2: Lowercase and remove everything but word characters, spaces and hyphens
    slug = slug.lower()
    slug = re.sub(r"[^a-z0-9_\s-]", "", slug)

    # Step 3: Handle whitespace and cleanup
    slug = re.sub(r"[\s-]+", "-", slug)
    return slug.strip("-")
