"""Scanner for the body of a ``<script>`` element.

A plain search for ``</script>`` is wrong for script source such as
``alert('</script>')`` or ``// </script>``. For JavaScript the scanner tracks
string literals and comments and only stops at a close tag that appears in
ordinary code. Other script types (templates, JSON, ...) only get the
structural close tag scan.

Escaped quotes are not understood: ``"a\\"b"`` ends the literal at the
escaped quote.
"""

import enum

from .constants import JAVASCRIPT_TYPES, WHITESPACE
from .cursor import Cursor

SCRIPT_END_TAG = "script"


class ScriptState(enum.IntEnum):
    DATA = 0
    TAG_OPEN = 1
    END_TAG_NAME = 2
    SLASH = 3
    LINE_COMMENT = 4
    BLOCK_COMMENT = 5
    BLOCK_COMMENT_STAR = 6
    STRING = 7


def is_javascript(script_type, javascript_types=JAVASCRIPT_TYPES):
    """Check a ``type`` attribute value against the known JavaScript types.

    A missing or empty type is JavaScript. Comparison ignores case and MIME
    parameters such as ``;charset=utf-8``.
    """
    if script_type is None:
        return True
    essence = script_type.split(";", 1)[0].strip().lower()
    return not essence or essence in javascript_types


class ScriptScanner:
    __slots__ = (
        "_handlers",
        "cursor",
        "end_tag_name",
        "javascript",
        "quote_char",
        "sink",
        "state",
        "tag_start",
    )

    def __init__(self, cursor, script_type=None, sink=None, javascript_types=JAVASCRIPT_TYPES):
        self.cursor = cursor
        self.sink = sink
        self.javascript = is_javascript(script_type, javascript_types)
        self.state = ScriptState.DATA
        self.quote_char = None
        self.tag_start = -1
        self.end_tag_name = []
        self._handlers = {
            ScriptState.DATA: self._state_data,
            ScriptState.TAG_OPEN: self._state_tag_open,
            ScriptState.END_TAG_NAME: self._state_end_tag_name,
            ScriptState.SLASH: self._state_slash,
            ScriptState.LINE_COMMENT: self._state_line_comment,
            ScriptState.BLOCK_COMMENT: self._state_block_comment,
            ScriptState.BLOCK_COMMENT_STAR: self._state_block_comment_star,
            ScriptState.STRING: self._state_string,
        }

    def read_body(self):
        """Return the script source and leave the cursor after ``</script>``.

        Without a closing tag the rest of the input is the body.
        """
        cursor = self.cursor
        text = cursor.text
        length = cursor.length
        start = cursor.pos
        handlers = self._handlers
        self.state = ScriptState.DATA
        while cursor.pos < length:
            c = text[cursor.pos]
            cursor.pos += 1
            if handlers[self.state](c):
                self._debug(f"script body closed at {self.tag_start}")
                return text[start : self.tag_start]
        self._debug("script body runs to the end of the input")
        return text[start:length]

    def _debug(self, message):
        sink = self.sink
        if sink is not None and sink.env_debug:
            sink.debug(f"ScriptScanner: {message}", indent=2)

    def _reconsume(self):
        self.cursor.pos -= 1

    # ---------------------
    # State handlers
    # ---------------------

    def _state_data(self, c):
        if c == "<":
            self.tag_start = self.cursor.pos - 1
            self.state = ScriptState.TAG_OPEN
            return False
        if not self.javascript:
            return False
        if c == "/":
            self.state = ScriptState.SLASH
        elif c in ('"', "'"):
            self.quote_char = c
            self.state = ScriptState.STRING
        return False

    def _state_tag_open(self, c):
        if c == "/":
            self.end_tag_name.clear()
            self.state = ScriptState.END_TAG_NAME
            return False
        if c in WHITESPACE:
            return False
        self._reconsume()
        self.state = ScriptState.DATA
        return False

    def _state_end_tag_name(self, c):
        if c == ">":
            if "".join(self.end_tag_name).strip().lower() == SCRIPT_END_TAG:
                return True
            self.state = ScriptState.DATA
            return False
        if c == "<":
            self._reconsume()
            self.state = ScriptState.DATA
            return False
        self.end_tag_name.append(c)
        return False

    def _state_slash(self, c):
        if c == "/":
            self.state = ScriptState.LINE_COMMENT
            return False
        if c == "*":
            self.state = ScriptState.BLOCK_COMMENT
            return False
        # Division or a regex; look at this character again as code
        self._reconsume()
        self.state = ScriptState.DATA
        return False

    def _state_line_comment(self, c):
        if c == "\n":
            self.state = ScriptState.DATA
        return False

    def _state_block_comment(self, c):
        if c == "*":
            self.state = ScriptState.BLOCK_COMMENT_STAR
        return False

    def _state_block_comment_star(self, c):
        if c == "/":
            self.state = ScriptState.DATA
        elif c != "*":
            self.state = ScriptState.BLOCK_COMMENT
        return False

    def _state_string(self, c):
        if c == self.quote_char:
            self.quote_char = None
            self.state = ScriptState.DATA
        return False


def read_script_body(text, pos=0, script_type=None):
    """Scan a script body in ``text`` starting at ``pos``.

    Returns ``(body, new_pos)`` with ``new_pos`` just past ``</script>``.
    """
    cursor = Cursor(text, pos)
    body = ScriptScanner(cursor, script_type).read_body()
    return body, cursor.pos
