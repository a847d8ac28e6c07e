"""Tests for the tag tokenizer."""

import unittest

from loosehtml.cursor import Cursor
from loosehtml.node import Element
from loosehtml.tokenizer import Tokenizer, read_tag
from loosehtml.tokens import TagShapeError


def _tag(html):
    element, _ = read_tag(html)
    return element


class TestReadTag(unittest.TestCase):
    def test_known_tags(self):
        cases = {
            "<!DOCTYPE>": Element("doctype", is_void=True),
            "<!DOCTYPE html>": Element("doctype", {"html": ""}, is_void=True),
            "<br>": Element("br", is_void=True),
            "<br/>": Element("br", is_void=True),
            "</div>": Element("div", is_close=True),
            "</ div>": Element("div", is_close=True),
            "< /div>": Element("div", is_close=True),
            '<div class="">': Element("div", {"class": ""}),
            '<div class="content">': Element("div", {"class": "content"}),
            "<div class=\"with='quotes'\">": Element("div", {"class": "with='quotes'"}),
            "<div class='with=\"escaped_quotes\"'>": Element("div", {"class": 'with="escaped_quotes"'}),
            '<section class="module streamline-automate type-standard" style="">': Element(
                "section", {"class": "module streamline-automate type-standard", "style": ""}
            ),
            '<a href="http://test/external" class="highlight" target="_blank">': Element(
                "a", {"href": "http://test/external", "class": "highlight", "target": "_blank"}
            ),
        }
        for html, expected in cases.items():
            with self.subTest(html=html):
                actual = _tag(html)
                assert expected.equal_to(actual), f"{html!r} -> {actual!r} {actual.attributes}"

    def test_self_closing_anchor(self):
        element = _tag('<a class="my-link" href="/test/route" />')
        assert element.name == "a"
        assert element.is_void
        assert not element.is_close
        assert element.attributes == {"class": "my-link", "href": "/test/route"}

    def test_comment(self):
        element = _tag("<!-- this is a comment -->")
        assert element.is_comment
        assert element.is_void
        assert element.name == "xmlcomment"
        assert element.raw_inner_span == " this is a comment "
        assert element.text == " this is a comment "

    def test_comment_keeps_aborted_dashes(self):
        assert _tag("<!-- a - b -->").raw_inner_span == " a - b "
        assert _tag("<!-- a -- b -->").raw_inner_span == " a -- b "
        assert _tag("<!--x--->").raw_inner_span == "x-"
        assert _tag("<!---->").raw_inner_span == ""

    def test_comment_may_contain_markup(self):
        assert _tag("<!-- <div> </div> -->").raw_inner_span == " <div> </div> "

    def test_names_are_lowercased(self):
        for html in ("<BR>", "<Br/>", "<bR >"):
            with self.subTest(html=html):
                element = _tag(html)
                assert element.name == "br"
                assert element.is_void

    def test_attribute_names_are_lowercased(self):
        element = _tag('<div CLASS="Main" Data-X=1 >')
        assert element.attributes == {"class": "Main", "data-x": "1"}

    def test_boolean_attributes(self):
        element = _tag("<input disabled checked>")
        assert element.attributes == {"disabled": "", "checked": ""}
        element = _tag("<input disabled/>")
        assert element.attributes == {"disabled": ""}
        assert element.is_void

    def test_duplicate_attribute_last_wins(self):
        element = _tag('<div id="a" id="b">')
        assert element.attributes == {"id": "b"}

    def test_whitespace_around_value(self):
        element = _tag('<div id=   "spaced">')
        assert element.attributes == {"id": "spaced"}

    def test_adjacent_quoted_attributes(self):
        element = _tag('<div a="1"b="2">')
        assert element.attributes == {"a": "1", "b": "2"}

    def test_unquoted_value_runs_to_whitespace(self):
        element = _tag("<div id=main class=x>")
        assert element.attributes["id"] == "main"
        # Only whitespace ends an unquoted value
        assert element.attributes["class"] == "x>"

    def test_custom_element_names(self):
        element = _tag("<my-widget data-id='7'>")
        assert element.name == "my-widget"
        assert element.attributes == {"data-id": "7"}

    def test_known_void_without_slash(self):
        for name in ("area", "img", "input", "keygen", "menuitem", "wbr"):
            with self.subTest(name=name):
                assert _tag(f"<{name}>").is_void

    def test_ordinary_tag_is_not_void(self):
        element = _tag("<p>")
        assert not element.is_void
        assert not element.is_close

    def test_slash_inside_attributes_keeps_reading(self):
        element = _tag('<img / src="a.png">')
        assert element.is_void
        assert element.attributes == {"src": "a.png"}

    def test_no_tag(self):
        assert _tag("there is no tag.") is None
        assert _tag("") is None

    def test_dangling_open(self):
        assert _tag("text <") is None
        assert _tag("<!") is None

    def test_partial_tag_at_end(self):
        element = _tag('<div class="a')
        assert element.name == "div"
        assert element.attributes == {"class": "a"}


class TestCursorMovement(unittest.TestCase):
    def test_cursor_after_tag(self):
        cursor = Cursor("<br/> more text ...")
        Tokenizer(cursor).read_tag()
        assert cursor.pos == 5

    def test_sequential_tags(self):
        cursor = Cursor("<p>hi</p>")
        tokenizer = Tokenizer(cursor)
        first = tokenizer.read_tag()
        assert first.name == "p"
        assert cursor.pos == 3
        second = tokenizer.read_tag()
        assert second.name == "p"
        assert second.is_close
        assert cursor.pos == len("<p>hi</p>")

    def test_skips_leading_text(self):
        element, pos = read_tag("abc <em>", 0)
        assert element.name == "em"
        assert pos == 8


class TestTagShapeErrors(unittest.TestCase):
    def test_empty_tags(self):
        for html in ("<>", "< >", "</>", "<!>"):
            cursor = Cursor(html)
            with self.subTest(html=html), self.assertRaises(TagShapeError) as ctx:
                Tokenizer(cursor).read_tag()
            assert ctx.exception.error.code == "empty-tag"
            assert cursor.pos == len(html)

    def test_empty_tag_carries_partial_record(self):
        with self.assertRaises(TagShapeError) as ctx:
            read_tag("</>")
        element = ctx.exception.element
        assert element is not None
        assert element.is_close
        assert element.name == ""

    def test_almost_comment(self):
        cursor = Cursor("<!-x>")
        with self.assertRaises(TagShapeError) as ctx:
            Tokenizer(cursor).read_tag()
        assert ctx.exception.error.code == "almost-comment"
        assert "Almost an XML comment" in str(ctx.exception)
        # Cursor is past the offending character
        assert cursor.pos == 4

    def test_error_position(self):
        with self.assertRaises(TagShapeError) as ctx:
            read_tag("text\nmore <>")
        error = ctx.exception.error
        assert error.line == 2
        assert error.column == 8
