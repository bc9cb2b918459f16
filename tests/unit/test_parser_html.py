"""Unit tests for parser/html.py."""

from __future__ import annotations

import time

import pytest

from parser.html import decode_html_bytes, parse_html


@pytest.mark.unit
def test_select_by_attribute_prefix_keeps_document_order():
    document = parse_html(
        '<meta property="og:b" content="2">'
        '<meta property="twitter:a" content="x">'
        '<meta property="og:a" content="1">'
    )

    matched = [el.attr("property") for el in document.select("meta", "property", startswith="og:")]

    assert matched == ["og:b", "og:a"]


@pytest.mark.unit
def test_prefix_match_is_case_sensitive_on_value():
    document = parse_html('<META PROPERTY="OG:title" CONTENT="x"><meta property="og:title" content="y">')

    matched = list(document.select("meta", "property", startswith="og:"))

    assert [el.attr("content") for el in matched] == ["y"]


@pytest.mark.unit
def test_select_equals_and_missing_attribute():
    document = parse_html('<meta name="description" content="n"><meta property="description" content="p">')

    assert document.first("meta", "property", equals="description").attr("content") == "p"
    assert document.first("meta", "itemprop") is None


@pytest.mark.unit
def test_title_text_decodes_entities():
    document = parse_html("<html><head><title> Fish &amp; Chips </title></head></html>")

    title = document.first("title")

    assert title is not None
    assert title.text == " Fish & Chips "


@pytest.mark.unit
def test_text_includes_descendants():
    document = parse_html("<div>one <p>two <b>three</b></p> four</div>")

    assert document.first("div").text == "one two three four"
    assert document.first("p").text == "two three"


@pytest.mark.unit
def test_void_and_self_closing_elements_do_not_capture_text():
    document = parse_html('<meta property="og:title" content="a"/><p>body</p><meta name="x">after')

    metas = list(document.select("meta"))

    assert [el.text for el in metas] == ["", ""]
    assert document.first("p").text == "body"


@pytest.mark.unit
def test_duplicate_attribute_first_wins():
    document = parse_html('<meta property="og:title" property="og:other" content="v">')

    assert document.first("meta").attr("property") == "og:title"


@pytest.mark.unit
def test_decode_uses_meta_charset_hint():
    body = '<meta charset="iso-8859-1"><title>Caf\xe9</title>'.encode("latin-1")

    assert "Café" in decode_html_bytes(body)


@pytest.mark.unit
def test_decode_falls_back_for_unknown_charset_and_invalid_utf8():
    body = b'<meta charset="no-such-codec"><title>\xff</title>'

    decoded = decode_html_bytes(body)

    assert decoded.endswith("<title>\xff</title>")


@pytest.mark.unit
def test_parse_html_accepts_bytes():
    document = parse_html('<title>Ünïcode</title>'.encode("utf-8"))

    assert document.first("title").text == "Ünïcode"


@pytest.mark.unit
def test_decode_prefers_content_type_charset_over_meta():
    body = '<meta charset="utf-8"><title>Привет</title>'.encode("koi8-r")

    decoded = decode_html_bytes(body, "text/html; charset=KOI8-R")

    assert decoded.endswith("<title>Привет</title>")


@pytest.mark.unit
def test_decode_reads_utf16_meta_label_as_utf8():
    body = b'<meta charset="utf-16"><meta property="og:title" content="Hello">'

    assert decode_html_bytes(body) == body.decode("ascii")
    assert parse_html(body).first("meta", "property").attr("content") == "Hello"


@pytest.mark.unit
def test_unclosed_list_items_close_each_other():
    document = parse_html("<ul><li>a<li>b</ul><p>after")

    assert [el.text for el in document.select("li")] == ["a", "b"]
    assert document.first("ul").text == "ab"
    assert document.first("p").text == "after"


@pytest.mark.unit
def test_stray_end_tag_is_ignored():
    document = parse_html("<div><span>x</span></span>y</div>")

    assert document.first("div").text == "xy"


@pytest.mark.unit
def test_many_unclosed_list_items_parse_in_linear_time():
    html = '<meta property="og:title" content="T"><ul>' + "<li>item text " * 20000

    started = time.monotonic()
    document = parse_html(html)
    items = list(document.select("li"))
    elapsed = time.monotonic() - started

    assert len(items) == 20000
    assert items[0].text == "item text "
    assert items[-1].text == "item text "
    assert document.first("meta", "property", startswith="og:").attr("content") == "T"
    assert elapsed < 5
