#!/usr/bin/env python3
"""
Random fuzzer for loosehtml.
Generates invalid/malformed HTML to test parser robustness, and checks the
tree invariants on every document that parses.
"""

import argparse
import random
import string
import sys
import time
import traceback

from loosehtml import StrictModeError, TagShapeError, parse, parse_strict
from loosehtml.constants import HTML_ELEMENTS, VOID_ELEMENTS
from loosehtml.query import iter_descendants

TAGS = HTML_ELEMENTS + ["my-widget", "x-1", "svg:rect"]
VOID_TAGS = sorted(VOID_ELEMENTS)

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "alt", "title", "name", "value", "type",
    "onclick", "data-x", "aria-label", "role", "disabled", "checked", "hidden",
]

SPECIAL_CHARS = [
    "\x00", "\x0b", "\x0c", "\x7f",  # Control chars
    "\u00a0",  # Non-breaking space
    "\u2028",  # Line separator
    "\u200b",  # Zero-width space
    "\ufeff",  # BOM
]

ENTITIES = ["&amp;", "&lt;", "&gt;", "&quot;", "&nbsp;", "&", "&#60;", "&#x3C;", "&unknown;"]

SCRIPT_TYPES = ["text/javascript", "module", "application/json", "text/template", "TEXT/JAVASCRIPT; charset=utf-8"]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def random_whitespace():
    ws = [" ", "\t", "\n", "\r", "\f", ""]
    return "".join(random.choices(ws, k=random.randint(0, 5)))


def fuzz_tag_name():
    """Generate malformed tag names."""
    strategies = [
        lambda: random.choice(TAGS),  # Valid tag
        lambda: random.choice(TAGS).upper(),  # Uppercase
        lambda: random.choice(TAGS) + random_string(1, 5),  # Tag with suffix
        lambda: random_string(1, 10),  # Random string
        lambda: random.choice(TAGS) + random.choice(SPECIAL_CHARS),  # Special suffix
        lambda: "-" + random.choice(TAGS),  # Dash prefix
    ]
    return random.choice(strategies)()


def fuzz_attribute():
    """Generate malformed attributes."""
    name = random.choice([random.choice(ATTRIBUTES), random_string(1, 15), "on" + random_string(2, 8)])
    value_strategies = [
        lambda: random_string(0, 50),
        lambda: random.choice(ENTITIES),
        lambda: "<b>" + random_string() + "</b>",
        lambda: "a=b>c",
        lambda: "\n" * random.randint(1, 5) + random_string(),
        lambda: "",
    ]
    quote_styles = [
        ('="', '"'),
        ("='", "'"),
        ("=", ""),  # Unquoted
        ("= ", ""),  # Space after equals
        ("", ""),  # No value
        ('="', ""),  # Unclosed quote
    ]
    value = random.choice(value_strategies)()
    quote_start, quote_end = random.choice(quote_styles)
    if not quote_start:
        return name
    return f"{name}{quote_start}{value}{quote_end}"


def fuzz_open_tag():
    """Generate malformed opening tags."""
    tag = fuzz_tag_name()
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    closing = random.choice([">", "/>", " >", "/ >", ">>", "/>>"])
    return f"<{tag}{random_whitespace() or ' '}{attrs}{random_whitespace()}{closing}"


def fuzz_close_tag():
    """Generate closing tags, sometimes mismatched."""
    tag = fuzz_tag_name()
    variants = [
        f"</{tag}>",
        f"</ {tag}>",
        f"</{tag} >",
        f"</{tag}{random_whitespace()}>",
        f"</{tag} garbage>",
    ]
    return random.choice(variants)


def fuzz_comment():
    """Generate comments, including the dash runs around the close."""
    content = random_string(0, 50)
    variants = [
        f"<!--{content}-->",
        f"<!--{content}->{content}-->",
        f"<!---{content}--->",
        f"<!--{content}--{content}-->",
        "<!---->",
        "<!-->-->",
        f"<!--{content}",
        f"<!DOCTYPE {random_string(1, 8)}>",
    ]
    return random.choice(variants)


def fuzz_script():
    """Generate script elements whose bodies contain markup, strings and comments."""
    script_type = random.choice(SCRIPT_TYPES)
    pieces = [
        "var s = '</script>';",
        'x("</div>");',
        "// </script>\n",
        "/* </script> */",
        "/** a ** </script> **/",
        "if (a < b) { c = a / b; }",
        "<!-- legacy -->",
        random_string(0, 30),
    ]
    body = "".join(random.choices(pieces, k=random.randint(0, 5)))
    attr = f' type="{script_type}"' if random.random() < 0.5 else ""
    close = random.choice(["</script>", "</SCRIPT >", "</script", ""])
    return f"<script{attr}>{body}{close}"


def fuzz_text():
    parts = [random_string(1, 40), random.choice(ENTITIES), random.choice(SPECIAL_CHARS), random_whitespace()]
    return "".join(random.choices(parts, k=random.randint(1, 6)))


def fuzz_deeply_nested():
    """Open many containers and close a random subset in random order."""
    depth = random.randint(10, 80)
    tags = [random.choice(TAGS) for _ in range(depth)]
    closes = tags[:]
    random.shuffle(closes)
    closes = closes[: random.randint(0, depth)]
    return "".join(f"<{tag}>" for tag in tags) + "".join(f"</{tag}>" for tag in closes)


def fuzz_well_formed():
    """Properly nested markup; strict and lenient parses must agree."""

    def element(depth):
        tag = random.choice([t for t in TAGS if t not in VOID_ELEMENTS and t != "script"])
        if depth > 4 or random.random() < 0.3:
            return f"<{tag}>{random_string(0, 10)}</{tag}>"
        children = "".join(element(depth + 1) for _ in range(random.randint(0, 3)))
        return f"<{tag} id=\"{random_string(1, 5)}\">{children}<{random.choice(VOID_TAGS)}></{tag}>"

    return element(0)


def generate_fuzzed_html():
    """Generate a complete fuzzed HTML document."""
    parts = []
    for _ in range(random.randint(1, 20)):
        element_type = random.choices(
            [
                fuzz_open_tag,
                fuzz_close_tag,
                fuzz_comment,
                fuzz_script,
                fuzz_text,
                fuzz_deeply_nested,
                fuzz_well_formed,
            ],
            weights=[20, 15, 6, 6, 15, 2, 4],
        )[0]
        parts.append(element_type())
    return "".join(parts)


def check_tree(root):
    """Raise AssertionError if the tree breaks a structural invariant."""
    seen = set()
    for node in iter_descendants(root):
        assert id(node) not in seen, f"{node!r} appears twice"
        seen.add(id(node))
        assert node.parent is not None, f"{node!r} has no parent"
        assert node in node.parent.children, f"{node!r} is missing from its parent"
        assert not node.is_close, f"close tag record {node!r} in tree"
        assert not node.is_root, "nested root"
        if node.is_void:
            assert not node.children, f"void {node!r} has children"


def parse_loosehtml(html):
    # Malformed tag syntax is the only expected failure in lenient mode
    try:
        root = parse(html)
    except TagShapeError:
        return None
    check_tree(root)
    try:
        strict_root = parse_strict(html)
    except StrictModeError:
        return root
    assert strict_root.equal_to(root), "strict parse succeeded but differs from lenient parse"
    return root


def run_fuzzer(parser_name, num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer against a parser."""
    if seed is not None:
        random.seed(seed)

    if parser_name == "loosehtml":
        parse_fn = parse_loosehtml
    elif parser_name == "html5lib":
        import html5lib

        parse_fn = lambda html: html5lib.parse(html)
    elif parser_name == "bs4":
        from bs4 import BeautifulSoup

        parse_fn = lambda html: BeautifulSoup(html, "html.parser")
    else:
        print(f"Unknown parser: {parser_name}")
        sys.exit(1)

    crashes = []
    hangs = []
    rejected = 0
    successes = 0

    print(f"Fuzzing {parser_name} with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            result = parse_fn(html)
            elapsed = time.perf_counter() - start

            # Check for hangs (>5 seconds)
            if elapsed > 5.0:
                hangs.append({"test_num": i, "html": html, "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            elif result is None:
                rejected += 1
            else:
                successes += 1

        except Exception as e:
            crashes.append(
                {
                    "test_num": i,
                    "html": html,
                    "error": str(e),
                    "traceback": traceback.format_exc(),
                }
            )
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    print(f"\n{'=' * 60}")
    print(f"FUZZING RESULTS: {parser_name}")
    print(f"{'=' * 60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Rejected:       {rejected}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests / elapsed_total:.1f}")

    if crashes:
        print(f"\n{'=' * 60}")
        print("CRASH DETAILS:")
        print(f"{'=' * 60}")
        for crash in crashes[:10]:
            print(f"\nTest #{crash['test_num']}:")
            print(f"  HTML: {crash['html'][:200]!r}...")
            print(f"  Error: {crash['error']}")
        if len(crashes) > 10:
            print(f"\n... and {len(crashes) - 10} more crashes")

    if hangs:
        print(f"\n{'=' * 60}")
        print("HANG DETAILS:")
        print(f"{'=' * 60}")
        for hang in hangs[:5]:
            print(f"\nTest #{hang['test_num']} ({hang['time']:.2f}s):")
            print(f"  HTML: {hang['html'][:200]!r}...")

    if save_failures and (crashes or hangs):
        filename = f"fuzz_failures_{parser_name}_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write(f"Fuzzing results for {parser_name}\n")
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Error: {crash['error']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for hang in hangs:
                f.write(f"=== HANG #{hang['test_num']} ({hang['time']:.2f}s) ===\n")
                f.write(f"HTML:\n{hang['html']}\n\n")
        print(f"\nFailures saved to {filename}")

    return len(crashes) == 0 and len(hangs) == 0


def main():
    parser = argparse.ArgumentParser(description="Fuzz HTML parsers with malformed input")
    parser.add_argument(
        "--parser",
        "-p",
        choices=["loosehtml", "html5lib", "bs4"],
        default="loosehtml",
        help="Parser to fuzz (default: loosehtml)",
    )
    parser.add_argument(
        "--num-tests",
        "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--save-failures", action="store_true", help="Save failures to a file")
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed HTML documents (no parsing)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(
        args.parser,
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
