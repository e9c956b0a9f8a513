from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from html_outline.models import HeadingTag
from html_outline.scanner import resolve_unique_id, scan_headings, scan_html


def test_scan_records_headings_in_document_order():
    result = scan_html(
        """
        <h1>Title</h1>
        <section><h2>Intro</h2><div><h3>Setup</h3></div></section>
        <h2>Usage</h2>
        <h6>Footnote</h6>
        """
    )

    assert [(record.tag, record.text, record.id) for record in result.records] == [
        (HeadingTag.H1, "Title", "title"),
        (HeadingTag.H2, "Intro", "intro"),
        (HeadingTag.H3, "Setup", "setup"),
        (HeadingTag.H2, "Usage", "usage"),
        (HeadingTag.H6, "Footnote", "footnote"),
    ]
    assert [record.level for record in result.records] == [1, 2, 3, 2, 6]


def test_scan_writes_ids_onto_the_tree():
    result = scan_html("<h2>Intro</h2><p>Body</p><h3>More <em>detail</em></h3>")

    assert str(result.tree) == (
        '<h2 id="intro">Intro</h2><p>Body</p><h3 id="more-detail">More <em>detail</em></h3>'
    )


def test_scan_flattens_nested_markup_into_text():
    result = scan_html('<h2><a href="/x">Linked</a> <code>code</code> text</h2>')

    assert result.records[0].text == "Linked code text"
    assert result.records[0].id == "linked-code-text"


def test_scan_duplicate_texts_get_numeric_suffixes():
    result = scan_html("<h2>Notes</h2><h3>Notes</h3><h2>Notes</h2>")

    assert [record.id for record in result.records] == ["notes", "notes-2", "notes-3"]


def test_scan_suffix_skips_ids_taken_by_other_headings():
    result = scan_html("<h2>Intro 2</h2><h2>Intro</h2><h2>Intro</h2>")

    assert [record.id for record in result.records] == ["intro-2", "intro", "intro-3"]


def test_scan_falls_back_to_section_for_empty_slugs():
    result = scan_html("<h2>???</h2><h2></h2><h3>日本語</h3>")

    assert [record.id for record in result.records] == ["section", "section-2", "section-3"]
    assert [record.text for record in result.records] == ["???", "", "日本語"]


def test_scan_replaces_existing_ids():
    result = scan_html('<h2 id="old" class="x">New name</h2>')

    heading = result.tree.find("h2")
    assert heading["id"] == "new-name"
    assert heading["class"] == ["x"]


def test_scan_leaves_other_elements_untouched():
    html = '<div id="keep"><p>Para</p><header>Not a heading</header></div>'
    result = scan_html(html)

    assert result.records == []
    assert str(result.tree) == html


def test_scan_without_headings_returns_the_same_tree():
    tree = BeautifulSoup("<p>Nothing here</p>", "html.parser")
    result = scan_headings(tree)

    assert result.tree is tree
    assert result.records == []


def test_scan_tolerates_malformed_html():
    result = scan_html("<h2>Open <b>bold</h2><h3>Unclosed")

    assert [record.tag for record in result.records] == [HeadingTag.H2, HeadingTag.H3]
    assert result.records[1].id == "unclosed"


def test_scan_matches_uppercase_tags():
    result = scan_html("<H2>Shouting</H2>")

    assert result.records[0].tag is HeadingTag.H2
    assert result.records[0].id == "shouting"


def test_scan_is_repeatable_on_the_same_source():
    html = "<h2>A</h2><h2>A</h2><h3>?</h3>"

    first = [record.id for record in scan_html(html).records]
    second = [record.id for record in scan_html(html).records]

    assert first == second == ["a", "a-2", "section"]


def test_each_scan_starts_with_fresh_ids():
    scan_html("<h2>Intro</h2>")
    result = scan_html("<h2>Intro</h2>")

    assert result.records[0].id == "intro"


def test_tree_ids_match_record_ids():
    result = scan_html("<h2>A</h2><h3>B</h3><h3>B</h3><h4>C</h4>")

    tree_ids = [heading["id"] for heading in result.tree.find_all(["h1", "h2", "h3", "h4", "h5", "h6"])]
    assert tree_ids == [record.id for record in result.records]


def test_scan_logs_collisions(caplog):
    with caplog.at_level(logging.DEBUG, logger="html_outline.scanner"):
        scan_html("<h2>Same</h2><h2>Same</h2>")

    assert "assigned 'same-2'" in caplog.text
    assert "Scanned 2 headings" in caplog.text


def test_resolve_unique_id_first_occurrence_is_unsuffixed():
    assert resolve_unique_id("intro", set()) == "intro"
    assert resolve_unique_id("intro", {"other"}) == "intro"


def test_resolve_unique_id_counts_from_two():
    assert resolve_unique_id("intro", {"intro"}) == "intro-2"
    assert resolve_unique_id("intro", {"intro", "intro-2", "intro-3"}) == "intro-4"


def test_resolve_unique_id_does_not_modify_used_ids():
    used = {"intro"}
    resolve_unique_id("intro", used)

    assert used == {"intro"}
