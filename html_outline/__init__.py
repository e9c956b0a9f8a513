"""
html-outline: heading anchors and nested outlines for HTML documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    html-outline page.html

Library Usage:
    from html_outline import RenderOptions, render_outline, scan_html

    result = scan_html(html)
    outline = render_outline(result.records, RenderOptions.from_attributes(tags="h2,h3,h4"))
    html_with_ids = str(result.tree)
"""

from .config import ConfigError, OutlineConfig
from .exceptions import OutlineError, UnknownHeadingTagError
from .markers import find_markers, parse_marker_attributes
from .models import HeadingRecord, HeadingTag, RenderOptions, ScanResult
from .pipeline import expand_markers, inject_styles, prepare_content, process_content
from .renderer import render_outline
from .scanner import resolve_unique_id, scan_headings, scan_html
from .slugify import generate_slug

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "scan_headings",
    "scan_html",
    "render_outline",
    "generate_slug",
    "resolve_unique_id",
    # Document pipeline
    "prepare_content",
    "expand_markers",
    "process_content",
    "inject_styles",
    "find_markers",
    "parse_marker_attributes",
    # Data models
    "HeadingTag",
    "HeadingRecord",
    "RenderOptions",
    "ScanResult",
    "OutlineConfig",
    # Exceptions
    "ConfigError",
    "OutlineError",
    "UnknownHeadingTagError",
    # Version
    "__version__",
]
