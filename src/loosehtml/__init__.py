from .context import TagContextStack
from .entities import escape_string, unescape_string
from .node import Element
from .parser import LooseHTML, parse, parse_strict
from .query import (
    flatten,
    get_element_by_id,
    get_elements_by_class_name,
    get_elements_by_predicate,
    get_elements_by_tag_name,
    get_inner_text,
    get_path,
    get_text,
    has_class,
)
from .serialize import render, to_html, to_string
from .tokens import MarkupError, NestingDepthError, ParseError, StrictModeError, TagShapeError
from .treebuilder import ParserOpts

__all__ = [
    "Element",
    "LooseHTML",
    "MarkupError",
    "NestingDepthError",
    "ParseError",
    "ParserOpts",
    "StrictModeError",
    "TagContextStack",
    "TagShapeError",
    "escape_string",
    "flatten",
    "get_element_by_id",
    "get_elements_by_class_name",
    "get_elements_by_predicate",
    "get_elements_by_tag_name",
    "get_inner_text",
    "get_path",
    "get_text",
    "has_class",
    "parse",
    "parse_strict",
    "render",
    "to_html",
    "to_string",
    "unescape_string",
]
