"""Scan primitives over the input text.

The tokenizer, the script scanner and the tree builder all walk the same
string with a shared integer position. ``Cursor`` bundles the two so each
parse owns its own position.
"""

from .constants import WHITESPACE


class Cursor:
    __slots__ = ("length", "pos", "text")

    def __init__(self, text, pos=0):
        self.text = text
        self.length = len(text)
        self.pos = pos

    def at_end(self):
        return self.pos >= self.length

    def peek(self):
        """Return the character under the cursor without consuming it, or None at the end."""
        if self.pos < self.length:
            return self.text[self.pos]
        return None

    def read_whitespace(self):
        """Consume a run of whitespace and return it."""
        text = self.text
        length = self.length
        start = self.pos
        pos = start
        while pos < length and text[pos] in WHITESPACE:
            pos += 1
        self.pos = pos
        return text[start:pos]

    def read_until_tag(self):
        """Consume everything up to, not including, the next ``<`` and return it.

        Returns the rest of the input when there is no further ``<``.
        """
        start = self.pos
        index = self.text.find("<", start)
        if index == -1:
            index = self.length
        self.pos = index
        return self.text[start:index]

    def line_number(self, pos=None):
        """1-based line number of ``pos`` (default: the cursor position)."""
        if pos is None:
            pos = self.pos
        return self.text.count("\n", 0, pos) + 1

    def column_number(self, pos=None):
        """1-based column of ``pos``, counted from the previous newline."""
        if pos is None:
            pos = self.pos
        last_newline = self.text.rfind("\n", 0, pos)
        return pos - last_newline

    def __repr__(self):
        return f"Cursor(pos={self.pos}, length={self.length})"


def is_whitespace_only(text):
    """True if ``text`` is empty or made only of parser whitespace."""
    for ch in text:
        if ch not in WHITESPACE:
            return False
    return True
