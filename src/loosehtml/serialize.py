"""Markup serialization for loosehtml trees."""

from .cursor import is_whitespace_only


def _format_attributes(attributes):
    if not attributes:
        return ""
    attr_parts = []
    for key, value in attributes.items():
        if value is None or value == "":
            attr_parts.append(key)
        else:
            # Escape quotes in attribute values
            escaped = str(value).replace('"', "&quot;")
            attr_parts.append(f'{key}="{escaped}"')
    return " " + " ".join(attr_parts)


def to_string(node):
    """Render a single node: the open tag of an element, or a text or comment node."""
    if node.is_root:
        return ""
    if node.is_text:
        if is_whitespace_only(node.raw_inner_span):
            return ""
        return node.raw_inner_span.strip()
    if node.is_comment:
        return f"<!--{node.raw_inner_span.strip()}-->"

    attr_str = _format_attributes(node.attributes)
    if node.is_void:
        return f"<{node.name}{attr_str}/>"
    return f"<{node.name}{attr_str}>"


def render(node, indent_size=2):
    """Render ``node`` and its subtree, one node per line, indented by depth."""
    if node.is_root:
        parts = []
        for child in node.children:
            _render_into(child, 0, indent_size, parts)
        return "\n".join(parts)
    parts = []
    _render_into(node, 0, indent_size, parts)
    return "\n".join(parts)


def _render_into(node, indent, indent_size, parts):
    # Explicit stack; trees from unclosed markup can nest thousands deep
    pending = [(node, indent, False)]
    while pending:
        current, level, closing = pending.pop()
        prefix = " " * (level * indent_size)
        if closing:
            parts.append(f"{prefix}</{current.name}>")
            continue

        line = to_string(current)
        if line:
            parts.append(f"{prefix}{line}")

        if not (current.is_void or current.is_text or current.is_comment or current.is_root):
            pending.append((current, level, True))
        for child in reversed(current.children):
            pending.append((child, level + 1, False))


to_html = render
