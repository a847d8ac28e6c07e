"""Tests for the tag context stack and the scan primitives."""

import unittest

from loosehtml.context import TagContextStack
from loosehtml.cursor import Cursor, is_whitespace_only


class TestTagContextStack(unittest.TestCase):
    def test_push_and_render(self):
        stack = TagContextStack()
        assert len(stack) == 0
        stack.push("br")
        assert len(stack) == 1
        stack.push("div")
        stack.push("div")
        assert len(stack) == 3
        assert str(stack) == "br > div > div"

    def test_empty_stack(self):
        stack = TagContextStack()
        assert str(stack) == "*"
        assert stack.peek() is None
        assert stack.pop() is None
        assert not stack

    def test_pop_and_peek(self):
        stack = TagContextStack(["html", "body", "div"])
        assert stack.peek() == "div"
        assert stack.pop() == "div"
        assert len(stack) == 2
        assert stack.peek() == "body"
        assert str(stack) == "html > body"

    def test_duplicate_is_independent(self):
        stack = TagContextStack(["br", "div", "div"])
        duplicated = stack.duplicate()
        assert str(duplicated) == str(stack)

        duplicated.push("p")
        assert str(stack) == "br > div > div"
        assert str(duplicated) == "br > div > div > p"

        duplicated.pop()
        duplicated.pop()
        assert len(duplicated) == 2
        assert len(stack) == 3
        assert stack.peek() == "div"

    def test_original_changes_do_not_leak_into_duplicate(self):
        stack = TagContextStack(["a", "b"])
        duplicated = stack.duplicate()
        stack.pop()
        stack.push("c")
        assert str(duplicated) == "a > b"
        assert str(stack) == "a > c"

    def test_names(self):
        assert TagContextStack(["a", "b", "c"]).names() == ["a", "b", "c"]


class TestCursor(unittest.TestCase):
    def test_read_until_tag(self):
        cursor = Cursor("      this is a test of reading until the tag <area/>")
        assert cursor.read_until_tag() == "      this is a test of reading until the tag "
        assert cursor.peek() == "<"

    def test_read_until_tag_without_tag(self):
        cursor = Cursor("there is no tag.")
        assert cursor.read_until_tag() == "there is no tag."
        assert cursor.at_end()
        assert cursor.peek() is None

    def test_read_until_tag_at_tag(self):
        for text in ("<a href='things.html'>things</a>", "<br/> more text ..."):
            with self.subTest(text=text):
                cursor = Cursor(text)
                assert cursor.read_until_tag() == ""
                assert cursor.pos == 0

    def test_read_whitespace(self):
        cursor = Cursor("     \n\t     this is a test string ...")
        assert cursor.read_whitespace() == "     \n\t     "
        assert cursor.peek() == "t"

    def test_line_and_column(self):
        cursor = Cursor("ab\ncd\nef")
        assert cursor.line_number(0) == 1
        assert cursor.line_number(3) == 2
        assert cursor.line_number(len("ab\ncd\nef")) == 3
        assert cursor.column_number(0) == 1
        assert cursor.column_number(4) == 2

    def test_is_whitespace_only(self):
        assert is_whitespace_only("")
        assert is_whitespace_only(" \t\r\n")
        assert not is_whitespace_only("  x ")
        # Non-breaking space is content
        assert not is_whitespace_only("\u00a0")
