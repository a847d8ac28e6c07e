#!/usr/bin/env python3
"""
Performance benchmark for loosehtml against other HTML parsers.
Reads .html files from a directory, or generates synthetic documents when no
directory is given.
"""

# ruff: noqa: PLC0415, BLE001
from __future__ import annotations

import argparse
import pathlib
import random
import sys
import time


def load_html_files(directory: pathlib.Path, limit: int | None = None) -> list[tuple[str, str]]:
    """Read ``*.html`` files below ``directory``. Returns (filename, html) tuples."""
    if not directory.is_dir():
        print(f"ERROR: Directory not found at {directory}")
        sys.exit(1)
    results = []
    for path in sorted(directory.rglob("*.html")):
        results.append((path.name, path.read_text(encoding="utf-8", errors="replace")))
        if limit and len(results) >= limit:
            break
    return results


def synthetic_html_files(count: int, seed: int = 0) -> list[tuple[str, str]]:
    """Documents mixing nesting, attributes, comments and scripts."""
    rng = random.Random(seed)
    files = []
    for i in range(count):
        rows = []
        for j in range(rng.randint(20, 200)):
            rows.append(
                f'<tr class="row-{j % 3}"><td id="c{j}">Cell {j} &amp; more</td>'
                f'<td><a href="/item/{j}">link</a><br></td></tr>',
            )
        body = "\n".join(rows)
        files.append(
            (
                f"synthetic-{i}.html",
                "<!DOCTYPE html>\n<html><head><title>Doc</title>"
                "<script>var s = '</script>'; if (a < b) { go(); }</script></head>"
                f"<body><!-- generated --><table>{body}</table></body></html>",
            ),
        )
    return files


def _time_parser(parse_fn, html_files: list, iterations: int) -> dict:
    all_times = []
    errors = 0
    error_files = []
    if html_files:
        try:
            parse_fn(html_files[0][1])
        except Exception:
            pass
    for _ in range(iterations):
        for filename, html in html_files:
            try:
                start = time.perf_counter()
                result = parse_fn(html)
                elapsed = time.perf_counter() - start
                all_times.append(elapsed)
                _ = result
            except Exception as e:
                errors += 1
                error_files.append((filename, str(e)))
    return {
        "total_time": sum(all_times),
        "mean_time": sum(all_times) / len(all_times) if all_times else 0,
        "min_time": min(all_times) if all_times else 0,
        "max_time": max(all_times) if all_times else 0,
        "errors": errors,
        "success_count": len(all_times),
        "error_files": error_files,
    }


def benchmark_loosehtml(html_files: list, iterations: int = 1) -> dict:
    """Benchmark loosehtml in lenient mode."""
    from loosehtml import parse

    return _time_parser(parse, html_files, iterations)


def benchmark_html5lib(html_files: list, iterations: int = 1) -> dict:
    """Benchmark html5lib parser."""
    try:
        import html5lib
    except ImportError:
        return {"error": "html5lib not installed (pip install html5lib)"}
    return _time_parser(html5lib.parse, html_files, iterations)


def benchmark_bs4(html_files: list, iterations: int = 1) -> dict:
    """Benchmark BeautifulSoup with the stdlib html.parser backend."""
    try:
        from bs4 import BeautifulSoup
    except ImportError:
        return {"error": "bs4 not installed (pip install beautifulsoup4)"}
    return _time_parser(lambda html: BeautifulSoup(html, "html.parser"), html_files, iterations)


def benchmark_html_parser(html_files: list, iterations: int = 1) -> dict:
    """Benchmark stdlib html.parser."""
    from html.parser import HTMLParser

    class SimpleHTMLParser(HTMLParser):
        def __init__(self):
            super().__init__()
            self.data = []

        def handle_starttag(self, tag, attrs):
            self.data.append(("start", tag, attrs))

        def handle_endtag(self, tag):
            self.data.append(("end", tag))

        def handle_data(self, data):
            self.data.append(("data", data))

    def parse_fn(html):
        parser = SimpleHTMLParser()
        parser.feed(html)
        return parser.data

    return _time_parser(parse_fn, html_files, iterations)


def print_results(results: dict, file_count: int, iterations: int = 1):
    """Pretty print benchmark results."""
    print("\n" + "=" * 80)
    if iterations > 1:
        print(f"BENCHMARK RESULTS ({file_count} HTML files x {iterations} iterations)")
    else:
        print(f"BENCHMARK RESULTS ({file_count} HTML files)")
    print("=" * 80)

    print(f"\n{'Parser':<15} {'Total (s)':<10} {'Mean (ms)':<10} {'Errors':<8}")
    print("-" * 80)

    loosehtml_time = results.get("loosehtml", {}).get("total_time", 0)

    for parser, result in results.items():
        if "error" in result:
            print(f"{parser:<15} {result['error']}")
            continue

        total = result["total_time"]
        mean_ms = result["mean_time"] * 1000
        speedup = ""
        if parser != "loosehtml" and loosehtml_time > 0 and total > 0:
            speedup = f" ({total / loosehtml_time:.2f}x)"
        print(f"{parser:<15} {total:<10.3f} {mean_ms:<10.3f} {result['errors']:<8}{speedup}")

    print("\n" + "=" * 80)

    for parser, result in results.items():
        error_files = result.get("error_files", [])
        if error_files:
            print(f"\nErrors for {parser}:")
            for filename, error_msg in error_files:
                print(f"  {filename}: {error_msg}")
            print()


def main():
    parser = argparse.ArgumentParser(description="Benchmark loosehtml against other HTML parsers")
    parser.add_argument("--dir", type=pathlib.Path, help="Directory of .html files (default: synthetic documents)")
    parser.add_argument(
        "--limit", type=int, default=100, help="Limit number of files to test (default: 100, use 0 for all)",
    )
    parser.add_argument(
        "--iterations", type=int, default=5, help="Number of iterations to run for averaging (default: 5)",
    )
    parser.add_argument(
        "--parsers",
        nargs="+",
        choices=["loosehtml", "html5lib", "bs4", "html.parser"],
        default=["loosehtml", "html5lib", "bs4", "html.parser"],
        help="Parsers to benchmark (default: all)",
    )

    args = parser.parse_args()

    limit = args.limit if args.limit > 0 else None
    if args.dir:
        print(f"Loading HTML files from {args.dir}...")
        html_files = load_html_files(args.dir, limit)
    else:
        html_files = synthetic_html_files(limit or 100)
    if not html_files:
        print("ERROR: No HTML files loaded")
        sys.exit(1)
    print(f"Loaded {len(html_files)} HTML files")

    total_bytes = sum(len(html) for _, html in html_files)
    print(f"Total HTML size: {total_bytes / 1024 / 1024:.2f} MB")

    benchmarks = {
        "loosehtml": benchmark_loosehtml,
        "html5lib": benchmark_html5lib,
        "bs4": benchmark_bs4,
        "html.parser": benchmark_html_parser,
    }
    results = {}
    for parser_name in args.parsers:
        print(f"\nBenchmarking {parser_name}...", end="", flush=True)
        res = benchmarks[parser_name](html_files, args.iterations)
        results[parser_name] = res
        if "error" in res:
            print(f" SKIPPED ({res['error']})")
        else:
            print(f" DONE ({res['total_time']:.3f}s)")

    print_results(results, len(html_files), args.iterations)


if __name__ == "__main__":
    main()
