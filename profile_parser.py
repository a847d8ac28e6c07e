#!/usr/bin/env python3
"""Profile loosehtml to find performance bottlenecks.

Usage:
    python profile_parser.py            # lenient and strict
    python profile_parser.py --strict   # strict only
"""

import cProfile
import io
import pstats
import sys

from loosehtml import parse, parse_strict

# Well-formed, so the strict parse walks the whole document too
SECTION = """
<div class="card" data-id="{i}">
    <h2 id="title-{i}">Entry {i}</h2>
    <p>Text with <b>bold</b>, <a href="/item/{i}?a=1&amp;b=2">a link</a> and a break<br>here.</p>
    <!-- entry {i} -->
    <img src="/img/{i}.png" alt="">
    <script type="text/javascript">
        // </script> inside a comment
        var label = '</div>'; if (count < {i}) {{ count = count / 2; }}
    </script>
    <ul><li>one</li><li>two</li></ul>
</div>
"""

DOCUMENT = (
    "<!DOCTYPE html>\n<html><head><title>Profile</title></head><body>"
    + "".join(SECTION.format(i=i) for i in range(200))
    + "</body></html>"
)

# Unclosed list items nest one level per item in this parser
UNCLOSED = "<ul>" + "<li>item" * 2000 + "</ul>"


def profile(label, parse_fn, rounds=10):
    pr = cProfile.Profile()
    pr.enable()
    for _ in range(rounds):
        root = parse_fn(DOCUMENT)
        _ = root.children
    if parse_fn is parse:
        parse_fn(UNCLOSED)
    pr.disable()

    s = io.StringIO()
    ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
    ps.print_stats(30)
    print(f"=== {label} ({len(DOCUMENT)} characters x {rounds}) ===")
    print(s.getvalue())


if __name__ == "__main__":
    if "--strict" not in sys.argv[1:]:
        profile("lenient", parse)
    profile("strict", parse_strict)
