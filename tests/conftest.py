import pytest
from click.testing import CliRunner

from html_outline.models import HeadingRecord, HeadingTag


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def make_records():
    """Builds heading records from ``(level, text)`` pairs, using the text as id."""

    def _make(*items: tuple[int, str]) -> list[HeadingRecord]:
        return [
            HeadingRecord(tag=HeadingTag(f"h{level}"), text=text, id=text) for level, text in items
        ]

    return _make
