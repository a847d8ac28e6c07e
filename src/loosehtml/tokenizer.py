import enum

from .constants import COMMENT_NAME, VOID_ELEMENTS, WHITESPACE
from .cursor import Cursor
from .node import Element
from .tokens import ParseError, TagShapeError


class TagState(enum.IntEnum):
    BEFORE_TAG = 0
    PREAMBLE = 1
    MARKUP_DECLARATION_OPEN = 2
    COMMENT_START_DASH = 3
    TAG_NAME = 4
    BEFORE_ATTRIBUTE_NAME = 5
    ATTRIBUTE_NAME = 6
    BEFORE_ATTRIBUTE_VALUE = 7
    ATTRIBUTE_VALUE_QUOTED = 8
    ATTRIBUTE_VALUE_UNQUOTED = 9
    SELF_CLOSING_START_TAG = 10
    COMMENT = 11
    COMMENT_END_DASH = 12
    COMMENT_END = 13


# Input that ends in these states never got a tag name
_DANGLING_STATES = (
    TagState.BEFORE_TAG,
    TagState.PREAMBLE,
    TagState.MARKUP_DECLARATION_OPEN,
    TagState.COMMENT_START_DASH,
)


class Tokenizer:
    """Reads one ``<...>`` construct at a time from a shared cursor.

    ``read_tag`` returns an Element record for a start tag, a close tag
    (``is_close``), a comment, or a ``<!...>`` declaration. Every state has
    one handler; a handler returns True once the record is complete.
    """

    __slots__ = (
        "_handlers",
        "attr_name",
        "attr_value",
        "comment",
        "cursor",
        "element",
        "quote_char",
        "self_closing",
        "sink",
        "state",
        "tag_name",
    )

    def __init__(self, cursor, sink=None):
        self.cursor = cursor
        self.sink = sink
        self.state = TagState.BEFORE_TAG
        self.element = None
        self.self_closing = False
        self.quote_char = None

        # Reusable buffers to avoid per-tag allocations.
        self.tag_name = []
        self.attr_name = []
        self.attr_value = []
        self.comment = []

        self._handlers = {
            TagState.BEFORE_TAG: self._state_before_tag,
            TagState.PREAMBLE: self._state_preamble,
            TagState.MARKUP_DECLARATION_OPEN: self._state_markup_declaration_open,
            TagState.COMMENT_START_DASH: self._state_comment_start_dash,
            TagState.TAG_NAME: self._state_tag_name,
            TagState.BEFORE_ATTRIBUTE_NAME: self._state_before_attribute_name,
            TagState.ATTRIBUTE_NAME: self._state_attribute_name,
            TagState.BEFORE_ATTRIBUTE_VALUE: self._state_before_attribute_value,
            TagState.ATTRIBUTE_VALUE_QUOTED: self._state_attribute_value_quoted,
            TagState.ATTRIBUTE_VALUE_UNQUOTED: self._state_attribute_value_unquoted,
            TagState.SELF_CLOSING_START_TAG: self._state_self_closing_start_tag,
            TagState.COMMENT: self._state_comment,
            TagState.COMMENT_END_DASH: self._state_comment_end_dash,
            TagState.COMMENT_END: self._state_comment_end,
        }

    def read_tag(self):
        """Consume the next tag and return its record.

        Returns None when there is no ``<`` left in the input, or when the
        input ends before a tag name starts. Input that ends later in a tag
        yields the partially read record.
        """
        self._reset()
        cursor = self.cursor
        text = cursor.text
        length = cursor.length
        handlers = self._handlers
        while cursor.pos < length:
            c = text[cursor.pos]
            cursor.pos += 1
            if handlers[self.state](c):
                self._debug(f"read {self.element!r} ending at {cursor.pos}")
                return self.element
        if self.state in _DANGLING_STATES:
            return None
        self._debug(f"input ended inside a tag in state {self.state.name}")
        return self._finish_at_eof()

    # ---------------------
    # Helper methods
    # ---------------------

    def _reset(self):
        self.state = TagState.BEFORE_TAG
        self.element = Element()
        self.self_closing = False
        self.quote_char = None
        self.tag_name.clear()
        self.attr_name.clear()
        self.attr_value.clear()
        self.comment.clear()

    def _debug(self, message):
        sink = self.sink
        if sink is not None and sink.env_debug:
            sink.debug(f"Tokenizer: {message}", indent=2)

    def _reconsume(self):
        self.cursor.pos -= 1

    def _finish_attribute(self):
        if self.attr_name:
            self.element.set_attribute("".join(self.attr_name), "".join(self.attr_value))
        self.attr_name.clear()
        self.attr_value.clear()

    def _complete(self):
        element = self.element
        if element.is_comment:
            element.name = COMMENT_NAME
            element.raw_inner_span = "".join(self.comment)
            return True
        element.name = "".join(self.tag_name).lower()
        element.is_void = element.is_void or self.self_closing or element.name in VOID_ELEMENTS
        return True

    def _finish_at_eof(self):
        state = self.state
        if state == TagState.COMMENT_END_DASH:
            self.comment.append("-")
        elif state == TagState.COMMENT_END:
            self.comment.append("--")
        elif state in (
            TagState.ATTRIBUTE_NAME,
            TagState.ATTRIBUTE_VALUE_QUOTED,
            TagState.ATTRIBUTE_VALUE_UNQUOTED,
            TagState.BEFORE_ATTRIBUTE_VALUE,
        ):
            self._finish_attribute()
        self._complete()
        return self.element

    def _raise_error(self, code, message):
        # The record is completed so callers can report what was read so far
        self._complete()
        cursor = self.cursor
        error = ParseError(
            code,
            line=cursor.line_number(),
            column=cursor.column_number(),
            message=message,
        )
        self._debug(f"error {error}")
        raise TagShapeError(error, element=self.element)

    # ---------------------
    # State handlers
    # ---------------------

    def _state_before_tag(self, c):
        if c == "<":
            self.state = TagState.PREAMBLE
        return False

    def _state_preamble(self, c):
        if c == "!":
            self.element.is_void = True
            self.state = TagState.MARKUP_DECLARATION_OPEN
            return False
        if c == "/":
            self.element.is_close = True
            return False
        if c == ">":
            self._raise_error("empty-tag", "Empty tag similar to `<>` or `< >` or `</>`")
        if c in WHITESPACE:
            return False
        self.tag_name.append(c)
        self.state = TagState.TAG_NAME
        return False

    def _state_markup_declaration_open(self, c):
        if c == "-":
            self.state = TagState.COMMENT_START_DASH
            return False
        # <!DOCTYPE ...> and friends go down the ordinary tag path
        self._reconsume()
        self.state = TagState.PREAMBLE
        return False

    def _state_comment_start_dash(self, c):
        if c == "-":
            self.element.is_comment = True
            self.state = TagState.COMMENT
            return False
        self._raise_error("almost-comment", "Almost an XML comment but not quite")

    def _state_tag_name(self, c):
        if c in WHITESPACE:
            self.state = TagState.BEFORE_ATTRIBUTE_NAME
            return False
        if c == ">":
            return self._complete()
        if c == "/":
            self.self_closing = True
            self.state = TagState.SELF_CLOSING_START_TAG
            return False
        self.tag_name.append(c)
        return False

    def _state_before_attribute_name(self, c):
        if c in WHITESPACE:
            return False
        if c == ">":
            return self._complete()
        if c == "/":
            self.self_closing = True
            self.state = TagState.SELF_CLOSING_START_TAG
            return False
        self.attr_name.append(c)
        self.state = TagState.ATTRIBUTE_NAME
        return False

    def _state_attribute_name(self, c):
        if c == "=":
            self.state = TagState.BEFORE_ATTRIBUTE_VALUE
            return False
        if c in WHITESPACE:
            self._finish_attribute()
            self.state = TagState.BEFORE_ATTRIBUTE_NAME
            return False
        if c in (">", "/"):
            # Boolean attribute; let the attribute scan close the tag
            self._finish_attribute()
            self._reconsume()
            self.state = TagState.BEFORE_ATTRIBUTE_NAME
            return False
        self.attr_name.append(c)
        return False

    def _state_before_attribute_value(self, c):
        if c in WHITESPACE:
            return False
        if c in ('"', "'"):
            self.quote_char = c
            self.state = TagState.ATTRIBUTE_VALUE_QUOTED
            return False
        self.attr_value.append(c)
        self.state = TagState.ATTRIBUTE_VALUE_UNQUOTED
        return False

    def _state_attribute_value_quoted(self, c):
        if c == self.quote_char:
            self._finish_attribute()
            self.quote_char = None
            self.state = TagState.BEFORE_ATTRIBUTE_NAME
            return False
        self.attr_value.append(c)
        return False

    def _state_attribute_value_unquoted(self, c):
        # Only whitespace ends an unquoted value, so `a=b>` keeps the `>`
        if c in WHITESPACE:
            self._finish_attribute()
            self.state = TagState.BEFORE_ATTRIBUTE_NAME
            return False
        self.attr_value.append(c)
        return False

    def _state_self_closing_start_tag(self, c):
        if c == ">":
            return self._complete()
        if c in WHITESPACE:
            return False
        self._reconsume()
        self.state = TagState.BEFORE_ATTRIBUTE_NAME
        return False

    def _state_comment(self, c):
        if c == "-":
            self.state = TagState.COMMENT_END_DASH
            return False
        self.comment.append(c)
        return False

    def _state_comment_end_dash(self, c):
        if c == "-":
            self.state = TagState.COMMENT_END
            return False
        self.comment.append("-")
        self.comment.append(c)
        self.state = TagState.COMMENT
        return False

    def _state_comment_end(self, c):
        if c == ">":
            return self._complete()
        if c == "-":
            # "--->": the first dash is content, the close stays pending
            self.comment.append("-")
            return False
        self.comment.append("--")
        self.comment.append(c)
        self.state = TagState.COMMENT
        return False


def read_tag(text, pos=0):
    """Tokenize the first tag in ``text`` starting at ``pos``.

    Returns ``(element, new_pos)``; ``element`` is None if no tag was found.
    """
    cursor = Cursor(text, pos)
    element = Tokenizer(cursor).read_tag()
    return element, cursor.pos
