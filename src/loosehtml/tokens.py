class ParseError:
    """Represents a parse error with location information."""

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, line=None, column=None, message=None):
        self.code = code
        self.line = line
        self.column = column
        self.message = message or code

    def __repr__(self):
        if self.line is not None and self.column is not None:
            return f"ParseError({self.code!r}, line={self.line}, column={self.column})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.code == other.code and self.line == other.line and self.column == other.column

    __hash__ = None  # Unhashable since we define __eq__


class MarkupError(Exception):
    """Base class for errors that abort a parse.

    ``error`` holds the ParseError record. ``root`` is filled in by the entry
    point with whatever tree had been built when the error was raised; it is
    for diagnostics only.
    """

    def __init__(self, error):
        self.error = error
        self.root = None
        super().__init__(error.message)


class TagShapeError(MarkupError):
    """Raised by the tokenizer for tags such as ``<>`` or ``<!-x``."""

    def __init__(self, error, element=None):
        super().__init__(error)
        self.element = element


class StrictModeError(MarkupError):
    """Raised in strict mode when a close tag does not match its opener."""

    def __init__(self, error, unexpected, expected, path):
        super().__init__(error)
        self.unexpected = unexpected
        self.expected = expected
        self.path = path

    @property
    def line(self):
        return self.error.line


class NestingDepthError(MarkupError):
    """Raised when markup nests deeper than the configured limit."""
