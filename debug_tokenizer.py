#!/usr/bin/env python3
"""Debug script to inspect how a piece of markup is tokenized and nested."""

import sys
from pathlib import Path

from loosehtml import MarkupError, LooseHTML
from loosehtml.cursor import Cursor
from loosehtml.script import ScriptScanner
from loosehtml.tokenizer import Tokenizer


def dump_tags(html):
    """Print every record the tokenizer produces, with its source range."""
    cursor = Cursor(html)
    tokenizer = Tokenizer(cursor)
    print("=== Tag records ===")
    while not cursor.at_end():
        text = cursor.read_until_tag()
        if text:
            print(f"  text   {text!r}")
        start = cursor.pos
        try:
            tag = tokenizer.read_tag()
        except MarkupError as exc:
            print(f"  ERROR  {exc.error}")
            return
        if tag is None:
            if start < cursor.length:
                print(f"  text   {html[start:]!r} (dangling)")
            break
        print(f"  [{start}:{cursor.pos}] line {cursor.line_number(start)}: {tag!r} {tag.attributes or ''}")
        if tag.name == "script" and not tag.is_close and not tag.is_void:
            body = ScriptScanner(cursor, tag.attributes.get("type")).read_body()
            print(f"  script {body!r}")


def dump_tree(html, strict):
    print(f"\n=== Tree ({'strict' if strict else 'lenient'}) ===")
    try:
        doc = LooseHTML(html, strict=strict, debug=True)
    except MarkupError as exc:
        print(f"\n!!! {type(exc).__name__}: {exc}")
        return
    print()
    print(doc.to_html())


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python debug_tokenizer.py <markup-or-file> [--strict]")
        print("Example: python debug_tokenizer.py '<div><p>x</div>' --strict")
        sys.exit(1)

    source = sys.argv[1]
    path = Path(source)
    html = path.read_text(encoding="utf-8") if path.is_file() else source
    dump_tags(html)
    dump_tree(html, "--strict" in sys.argv[2:])
