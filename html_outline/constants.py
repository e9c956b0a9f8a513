"""Constants used across the html-outline package."""

from __future__ import annotations

from .config import OutlineConfig

DEFAULT_CONFIG = OutlineConfig()

# Marker and rendering defaults
OUTLINE_MARKER = DEFAULT_CONFIG.marker
DEFAULT_TAGS = DEFAULT_CONFIG.tags
DEFAULT_TITLE = DEFAULT_CONFIG.title

# Used when a heading's text slugifies to nothing
FALLBACK_SLUG = "section"

# Prefix some DOM providers require to read UTF-8 fragments; never part of output
ENCODING_DECLARATION = '<?xml encoding="utf-8" ?>'

CONTAINER_CLASS = "outline-container"
TITLE_CLASS = "outline-title"
LIST_CLASS = "outline-list"

HTML_EXTENSIONS = (".html", ".htm", ".xhtml")
