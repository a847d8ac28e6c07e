from .constants import COMMENT_NAME, ROOT_NAME, TEXT_NAME


class Element:
    """A node of the parsed tree.

    - name: lower-cased tag name, or "text" / "xmlcomment" / "root" for
      synthetic nodes
    - attributes: dict of lower-cased attribute name to verbatim value
    - children: list of child Elements in document order
    - parent: the Element whose children contain this one (None on the root
      and on detached records)
    - raw_inner_span: the source text between the open and close tag; the
      literal text for text nodes and the body for comments
    """

    __slots__ = (
        "attributes",
        "children",
        "is_close",
        "is_comment",
        "is_data",
        "is_root",
        "is_text",
        "is_void",
        "name",
        "parent",
        "raw_inner_span",
    )

    def __init__(
        self,
        name="",
        attributes=None,
        *,
        raw_inner_span="",
        is_text=False,
        is_void=False,
        is_comment=False,
        is_root=False,
        is_close=False,
        is_data=False,
    ):
        self.name = name
        if attributes:
            # Lowercase attribute names; a later case variant wins
            self.attributes = {key.lower(): value for key, value in attributes.items()}
        else:
            self.attributes = {}
        self.children = []
        self.parent = None
        self.raw_inner_span = raw_inner_span
        self.is_text = is_text
        self.is_void = is_void
        self.is_comment = is_comment
        self.is_root = is_root
        self.is_close = is_close
        self.is_data = is_data

    @classmethod
    def root(cls):
        return cls(ROOT_NAME, is_root=True)

    @classmethod
    def text_node(cls, text, is_data=False):
        return cls(TEXT_NAME, raw_inner_span=text, is_text=True, is_void=True, is_data=is_data)

    @classmethod
    def comment(cls, body):
        return cls(COMMENT_NAME, raw_inner_span=body, is_comment=True, is_void=True)

    @property
    def text(self):
        """Literal content of a text or comment node; empty for elements."""
        if self.is_text or self.is_comment:
            return self.raw_inner_span
        return ""

    def get_attribute(self, name, default=None):
        return self.attributes.get(name.lower(), default)

    def has_attribute(self, name):
        return name.lower() in self.attributes

    def set_attribute(self, name, value):
        """Record an attribute during tokenization. Later duplicates overwrite earlier ones."""
        self.attributes[name.lower()] = value

    def append_child(self, child):
        if child.parent is not None:
            msg = f"<{child.name}> already belongs to <{child.parent.name}>"
            raise ValueError(msg)
        if child.is_root:
            msg = "The root element cannot be appended to another element"
            raise ValueError(msg)
        if self.is_void:
            msg = f"Cannot append <{child.name}> to void element <{self.name}>"
            raise ValueError(msg)
        child.parent = self
        self.children.append(child)

    def equal_to(self, other):
        """Structural equality: name, flags, inner span, attributes and children."""
        pending = [(self, other)]
        while pending:
            mine, theirs = pending.pop()
            if mine.name != theirs.name:
                return False
            if mine.is_void != theirs.is_void or mine.is_close != theirs.is_close:
                return False
            if mine.raw_inner_span != theirs.raw_inner_span:
                return False
            if mine.attributes != theirs.attributes:
                return False
            if len(mine.children) != len(theirs.children):
                return False
            pending.extend(zip(mine.children, theirs.children))
        return True

    def __repr__(self):
        if self.is_text:
            return f"Element(#text={self.raw_inner_span[:30]!r})"
        if self.is_comment:
            return f"Element(#comment={self.raw_inner_span[:30]!r})"
        if self.is_root:
            return f"Element(#root, children={len(self.children)})"
        slash = "/" if self.is_close else ""
        return f"Element(<{slash}{self.name}>, children={len(self.children)})"
