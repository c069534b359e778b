"""
Tests for text cleaning helpers.
"""

from mdcards.cleaning import (
    normalize_whitespace,
    split_paragraphs,
    strip_link_suffix,
    text_markup,
)


def test_normalize_whitespace():
    assert normalize_whitespace("  a\u00a0 b\u200b c\n") == "a b c"


def test_split_paragraphs_on_blank_lines():
    assert split_paragraphs("a\nb\n \nc") == ["a\nb", "c"]


def test_text_markup_escapes():
    assert text_markup("a < b & c\n\nd") == "a &lt; b &amp; c<br/><br/>d"


def test_strip_link_suffix():
    assert strip_link_suffix("cat.png|300") == "cat.png"
    assert strip_link_suffix("note#section") == "note"
