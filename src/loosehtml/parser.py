"""loosehtml parser entry points."""

from . import query
from .serialize import to_html
from .treebuilder import ParserOpts, TreeBuilder


class LooseHTML:
    __slots__ = ("debug", "opts", "root", "strict", "tree_builder")

    def __init__(
        self,
        html,
        *,
        strict=False,
        debug=False,
        opts=None,
        tree_builder=None,
    ):
        self.debug = bool(debug)
        self.strict = bool(strict)
        self.opts = opts or ParserOpts()
        self.tree_builder = tree_builder or TreeBuilder(html, strict=self.strict, debug=self.debug, opts=self.opts)
        self.root = self.tree_builder.build()

    @property
    def text(self):
        return query.get_inner_text(self.root)

    def get_elements_by_tag_name(self, tag_name):
        return query.get_elements_by_tag_name(self.root, tag_name)

    def get_elements_by_class_name(self, class_name):
        return query.get_elements_by_class_name(self.root, class_name)

    def get_element_by_id(self, element_id):
        return query.get_element_by_id(self.root, element_id)

    def to_html(self, indent_size=2):
        return to_html(self.root, indent_size=indent_size)


def parse(html, *, debug=False, opts=None):
    """Parse ``html`` leniently: close tags that match nothing are dropped."""
    return LooseHTML(html, debug=debug, opts=opts).root


def parse_strict(html, *, debug=False, opts=None):
    """Parse ``html``, raising StrictModeError at the first mismatched close tag."""
    return LooseHTML(html, strict=True, debug=debug, opts=opts).root
