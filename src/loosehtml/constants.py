"""Element constants for the loosehtml parser.

The parser only needs a handful of fixed sets: the elements that are always
leaves, the reserved names used for synthetic nodes, and the script types
that get comment and string awareness in the script scanner.

Usage:
    from loosehtml.constants import VOID_ELEMENTS, TEXT_NAME

References:
    - https://developer.mozilla.org/en-US/docs/Web/HTML/Element
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
"""

# Reserved names for nodes that do not come from a real tag
ROOT_NAME = "root"
TEXT_NAME = "text"
COMMENT_NAME = "xmlcomment"

# Elements that never take children, whether or not they use "/>"
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "menuitem",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Only these four count as whitespace between tags and inside tags
WHITESPACE = frozenset({" ", "\t", "\r", "\n"})

# Script types that get comment and string literal awareness
JAVASCRIPT_TYPES = frozenset(
    {
        "",
        "module",
        "text/javascript",
        "application/javascript",
        "application/x-javascript",
        "text/ecmascript",
        "application/ecmascript",
    }
)

HTML_ELEMENTS = [
    "html",
    "head",
    "body",
    "title",
    "meta",
    "base",
    "link",
    "style",
    "address",
    "article",
    "nav",
    "section",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hgroup",
    "dd",
    "div",
    "dl",
    "figcaption",
    "hr",
    "li",
    "main",
    "ol",
    "p",
    "pre",
    "ul",
    "a",
    "abbr",
    "b",
    "bdi",
    "br",
    "cite",
    "code",
    "data",
    "dfn",
    "em",
    "i",
    "kbd",
    "mark",
    "q",
    "rp",
    "rt",
    "rtc",
    "s",
    "samp",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "time",
    "u",
    "var",
    "wbr",
    "area",
    "audio",
    "map",
    "track",
    "video",
    "img",
    "iframe",
    "embed",
    "object",
    "param",
    "source",
    "canvas",
    "noscript",
    "script",
    "del",
    "ins",
    "caption",
    "col",
    "colgroup",
    "table",
    "thead",
    "tbody",
    "tfoot",
    "th",
    "tr",
    "td",
    "button",
    "datalist",
    "fieldset",
    "form",
    "input",
    "keygen",
    "label",
    "legend",
    "meter",
    "optgroup",
    "option",
    "output",
    "progress",
    "select",
    "details",
    "dialog",
    "menu",
    "menuitem",
    "summary",
    "content",
    "decorator",
    "shadow",
    "template",
]
