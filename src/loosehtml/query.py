"""Read-only lookups over a parsed tree.

These helpers walk the finished tree and never modify it. They work on any
Element, so they can be pointed at a subtree as easily as at the root.
"""


def iter_descendants(node):
    """Yield every node below ``node`` in document order (pre-order)."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        if current.children:
            stack.extend(reversed(current.children))


def flatten(node):
    return list(iter_descendants(node))


def get_elements_by_tag_name(node, tag_name):
    """All descendants named ``tag_name``, compared case-insensitively.

    ``"text"`` selects the text nodes.
    """
    wanted = tag_name.lower()
    return [child for child in iter_descendants(node) if child.name == wanted]


def get_elements_by_predicate(node, predicate):
    return [child for child in iter_descendants(node) if predicate(child)]


def has_class(node, class_name):
    """Check the whitespace separated ``class`` attribute, ignoring case."""
    value = node.attributes.get("class")
    if not value:
        return False
    return class_name.lower() in value.lower().split()


def get_elements_by_class_name(node, class_name):
    return [child for child in iter_descendants(node) if has_class(child, class_name)]


def get_element_by_id(node, element_id):
    """First descendant whose ``id`` attribute equals ``element_id``, or None."""
    for child in iter_descendants(node):
        if child.attributes.get("id") == element_id:
            return child
    return None


def get_id(node):
    return node.attributes.get("id", "")


def find_ancestor(node, tag_name_or_predicate):
    """Find the nearest ancestor matching the given tag name or predicate.

    Includes ``node`` itself in the search. Returns None if nothing matches.
    """
    is_callable = callable(tag_name_or_predicate)
    current = node
    while current is not None:
        if is_callable:
            if tag_name_or_predicate(current):
                return current
        elif current.name == tag_name_or_predicate:
            return current
        current = current.parent
    return None


def get_path(node):
    """Names from the outermost element down to ``node``, joined by " > ".

    The synthetic root is not part of the path.
    """
    names = []
    current = node
    while current is not None and not current.is_root:
        names.append(current.name)
        current = current.parent
    names.reverse()
    return " > ".join(names)


def get_text(node):
    """Concatenate every text node below ``node``, script bodies included."""
    return "".join(child.raw_inner_span for child in iter_descendants(node) if child.is_text)


def get_inner_text(node):
    """Concatenate the document text below ``node``, leaving out script bodies."""
    return "".join(
        child.raw_inner_span for child in iter_descendants(node) if child.is_text and not child.is_data
    )
