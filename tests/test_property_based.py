from __future__ import annotations

import re
import string

from hypothesis import given
from hypothesis import strategies as st

from html_outline.models import HeadingTag, RenderOptions
from html_outline.renderer import render_outline
from html_outline.scanner import scan_html
from html_outline.slugify import generate_slug

SLUG_PATTERN = re.compile(r"^(?:[a-z0-9_]+(?:-[a-z0-9_]+)*)?$")

# Whitespace-only strings are collapsed by the parser, so titles need visible text or none
title_strategy = st.text(alphabet=string.ascii_letters + string.digits + " _-?!", max_size=24).filter(
    lambda title: title == "" or title.strip()
)
headings_strategy = st.lists(st.tuples(st.integers(min_value=1, max_value=6), title_strategy), max_size=20)


def _document(headings: list[tuple[int, str]]) -> str:
    return "<p>intro</p>".join(f"<h{level}>{title}</h{level}>" for level, title in headings)


@given(st.text())
def test_generate_slug_is_fragment_safe(text: str):
    slug = generate_slug(text)
    assert SLUG_PATTERN.match(slug)


@given(st.text())
def test_generate_slug_is_idempotent(text: str):
    slug = generate_slug(text)
    assert generate_slug(slug) == slug


@given(headings_strategy)
def test_scan_ids_are_unique_non_empty_and_in_order(headings):
    result = scan_html(_document(headings))

    ids = [record.id for record in result.records]
    assert len(ids) == len(headings)
    assert len(set(ids)) == len(ids)
    assert all(ids)
    assert [(record.level, record.text) for record in result.records] == headings


@given(headings_strategy)
def test_scan_is_deterministic(headings):
    document = _document(headings)

    assert scan_html(document).records == scan_html(document).records


@given(headings_strategy)
def test_tree_ids_match_records(headings):
    result = scan_html(_document(headings))

    tree_ids = [heading["id"] for heading in result.tree.find_all([tag.value for tag in HeadingTag])]
    assert tree_ids == [record.id for record in result.records]


@given(
    headings_strategy,
    st.sets(st.sampled_from(list(HeadingTag))),
    st.text(alphabet=string.ascii_letters + " ", max_size=10),
)
def test_render_outputs_one_link_per_allowed_record(headings, allowed_tags, title):
    records = scan_html(_document(headings)).records
    options = RenderOptions(allowed_tags=frozenset(allowed_tags), title=title)

    output = render_outline(records, options)

    expected = [record for record in records if record.tag in allowed_tags]
    if not expected:
        assert output == ""
    else:
        assert output.count("<li>") == len(expected)
        assert re.findall(r'href="#([^"]*)"', output) == [record.id for record in expected]
        assert output.endswith("</li></ul></div>")
