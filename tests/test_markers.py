from __future__ import annotations

import pytest

from html_outline.markers import contains_marker, find_markers, parse_marker_attributes


def test_contains_marker():
    assert contains_marker("<p>[outline]</p>")
    assert contains_marker('<p>[outline tags="h2"]</p>')
    assert not contains_marker("<p>outline</p>")
    assert contains_marker("[toc]", marker="toc")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", {}),
        (' tags="h2,h3"', {"tags": "h2,h3"}),
        (" title='My Contents'", {"title": "My Contents"}),
        (" tags=h2,h4 title=Contents", {"tags": "h2,h4", "title": "Contents"}),
        (' title=""', {"title": ""}),
        (' TAGS = "h3"', {"tags": "h3"}),
        (' tags="h2" tags="h4"', {"tags": "h4"}),
        (' data-x="1" stray', {"data-x": "1"}),
        (' title="Q&amp;A"', {"title": "Q&A"}),
        (' title="1 &lt; 2" tags=h2', {"title": "1 < 2", "tags": "h2"}),
        (" title='Say &quot;hi&quot;'", {"title": 'Say "hi"'}),
    ],
)
def test_parse_marker_attributes(raw: str, expected: dict[str, str]):
    assert parse_marker_attributes(raw) == expected


def test_find_markers_positions_and_attributes():
    content = 'a[outline]b[outline tags="h3" title=""]c'

    markers = list(find_markers(content))

    assert [(m.start, m.end) for m in markers] == [(1, 10), (11, 39)]
    assert [content[m.start : m.end] for m in markers] == ["[outline]", '[outline tags="h3" title=""]']
    assert markers[0].attributes == {}
    assert markers[1].attributes == {"tags": "h3", "title": ""}


def test_find_markers_requires_exact_name():
    assert list(find_markers("[outlines] [outline-x] [outlin]")) == []


def test_find_markers_custom_name():
    markers = list(find_markers("[outline] [toc.v2 tags=h2]", marker="toc.v2"))

    assert len(markers) == 1
    assert markers[0].attributes == {"tags": "h2"}
