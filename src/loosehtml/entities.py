"""Entity escaping for text taken from or put into a tree.

The parser stores text and attribute values verbatim; callers decide when to
decode. Both directions use Python's complete HTML5 entity handling.
"""

import html


def escape_string(text, quote=True):
    """Escape ``&``, ``<``, ``>`` and, unless ``quote`` is false, both quote characters."""
    return html.escape(text, quote=quote)


def unescape_string(text):
    """Decode named and numeric character references (``&amp;``, ``&#60;``, ``&#x3C;``)."""
    return html.unescape(text)


def decoded_text(node):
    """Text content of a text node with character references decoded.

    Script bodies (``is_data``) are returned as-is.
    """
    if node.is_data:
        return node.raw_inner_span
    return unescape_string(node.text)
