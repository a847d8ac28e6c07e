from .constants import JAVASCRIPT_TYPES
from .context import TagContextStack
from .cursor import Cursor, is_whitespace_only
from .node import Element
from .script import ScriptScanner
from .tokenizer import Tokenizer
from .tokens import MarkupError, NestingDepthError, ParseError, StrictModeError


class _OpenElement:
    __slots__ = ("element", "stack", "start")

    def __init__(self, element, stack, start):
        self.element = element
        self.stack = stack
        self.start = start


class ParserOpts:
    __slots__ = ("discard_bom", "keep_whitespace_text", "max_depth", "script_types")

    def __init__(
        self,
        max_depth=None,
        script_types=JAVASCRIPT_TYPES,
        keep_whitespace_text=False,
        discard_bom=True,
    ):
        self.max_depth = None if max_depth is None else int(max_depth)
        self.script_types = frozenset(t.lower() for t in script_types)
        self.keep_whitespace_text = bool(keep_whitespace_text)
        self.discard_bom = bool(discard_bom)


class TreeBuilder:
    """Tree construction by descent over a stack of open elements.

    Each open container is one frame: the element, the TagContextStack of
    its ancestors plus itself, and the position where its children start. A
    frame ends at the close tag that matches the top of its stack, or when
    the input runs out. A new container gets a duplicate of its parent's
    stack so a child frame never changes its parent's view. Frames live in a
    list rather than on the Python call stack, so nesting depth is bounded
    only by ``ParserOpts.max_depth`` when one is set.

    In strict mode a close tag that does not match raises StrictModeError; in
    lenient mode the close tag is dropped and parsing continues.
    """

    __slots__ = ("cursor", "env_debug", "opts", "strict", "tokenizer")

    def __init__(self, html, *, strict=False, debug=False, opts=None):
        self.opts = opts or ParserOpts()
        html = html or ""
        if html and html[0] == "\ufeff" and self.opts.discard_bom:
            html = html[1:]
        self.strict = bool(strict)
        self.env_debug = bool(debug)
        self.cursor = Cursor(html)
        self.tokenizer = Tokenizer(self.cursor, sink=self)

    def debug(self, message, indent=4):
        if self.env_debug:
            print(f"{' ' * indent}{message}")

    def build(self):
        """Parse the whole input and return the root Element.

        A MarkupError leaves the builder with the tree built so far attached
        to the exception as ``root``.
        """
        root = Element.root()
        self.debug(f"parsing {self.cursor.length} characters, strict={self.strict}", indent=0)
        frames = [_OpenElement(root, TagContextStack(), self.cursor.pos)]
        try:
            self._parse_children(frames)
        except MarkupError as exc:
            # Containers still open are attached unfinished
            self._close_frames(frames, None)
            exc.root = root
            raise
        self._close_frames(frames, self.cursor.pos)
        return root

    def _parse_children(self, frames):
        cursor = self.cursor
        text = cursor.text
        keep_whitespace = self.opts.keep_whitespace_text
        while not cursor.at_end():
            frame = frames[-1]
            parent = frame.element
            depth = len(frames) - 1

            run = cursor.read_until_tag()
            if run and (keep_whitespace or not is_whitespace_only(run)):
                parent.append_child(Element.text_node(run))

            tag_start = cursor.pos
            tag = self.tokenizer.read_tag()
            if tag is None:
                # A trailing "<" or "<!" with nothing after it is kept as text
                dangling = text[tag_start:]
                if dangling and (keep_whitespace or not is_whitespace_only(dangling)):
                    parent.append_child(Element.text_node(dangling))
                return

            if tag.is_close:
                expected = frame.stack.peek()
                if tag.name == expected:
                    frames.pop()
                    parent.raw_inner_span = text[frame.start : tag_start]
                    frames[-1].element.append_child(parent)
                    self.debug(f"closed <{expected}> at depth {depth}", indent=depth * 2)
                    continue
                if self.strict:
                    self._raise_mismatch(tag, expected, frame.stack, tag_start)
                self.debug(f"dropping unexpected </{tag.name}> inside {frame.stack}", indent=depth * 2)
                continue

            if tag.is_void:
                parent.append_child(tag)
            elif tag.name == "script":
                self._parse_script(parent, tag)
            else:
                child_stack = frame.stack.duplicate()
                child_stack.push(tag.name)
                max_depth = self.opts.max_depth
                if max_depth is not None and depth + 1 > max_depth:
                    self._raise_too_deep(child_stack)
                self.debug(f"descending into <{tag.name}>", indent=depth * 2)
                frames.append(_OpenElement(tag, child_stack, cursor.pos))

    def _close_frames(self, frames, end):
        """Attach every open container to its parent, innermost first.

        With ``end`` set each container's inner span runs to ``end``.
        """
        text = self.cursor.text
        while frames:
            frame = frames.pop()
            if end is not None:
                frame.element.raw_inner_span = text[frame.start : end]
            if frames:
                frames[-1].element.append_child(frame.element)

    def _parse_script(self, parent, tag):
        # No type attribute means JavaScript whatever script_types holds
        script_type = tag.attributes.get("type")
        scanner = ScriptScanner(self.cursor, script_type, sink=self, javascript_types=self.opts.script_types)
        body = scanner.read_body()
        tag.raw_inner_span = body
        tag.append_child(Element.text_node(body, is_data=True))
        parent.append_child(tag)

    def _raise_too_deep(self, stack):
        cursor = self.cursor
        error = ParseError(
            "nesting-too-deep",
            line=cursor.line_number(),
            column=cursor.column_number(),
            message=f"Markup nests deeper than {self.opts.max_depth} levels at path: {stack}",
        )
        raise NestingDepthError(error)

    def _raise_mismatch(self, tag, expected, stack, tag_start):
        cursor = self.cursor
        line = cursor.line_number(tag_start)
        expected_name = expected if expected is not None else TagContextStack.EMPTY_PATH
        message = f"unexpected close </{tag.name}> (expected </{expected_name}>) on line: {line}"
        message += f"\ncurrent path: {stack}"
        error = ParseError(
            "unexpected-close-tag",
            line=line,
            column=cursor.column_number(tag_start),
            message=message,
        )
        self.debug(message, indent=0)
        raise StrictModeError(error, unexpected=tag.name, expected=expected, path=str(stack))
