"""
Build script for loosehtml with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    python -m build

    # Compiled with mypyc
    LOOSEHTML_USE_MYPYC=1 pip install .
"""

import os
import sys
from pathlib import Path

from setuptools import find_packages, setup

# Determine if we should use mypyc
USE_MYPYC = os.environ.get("LOOSEHTML_USE_MYPYC", "0") == "1"

# Character-level scanners run once per input character; compiling them is
# where mypyc pays off. node.py is excluded because tests build Elements by hand.
MYPYC_MODULES = [
    "src/loosehtml/cursor.py",
    "src/loosehtml/tokenizer.py",
    "src/loosehtml/script.py",
    "src/loosehtml/treebuilder.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print(
            "ERROR: mypyc is not installed. Install with: pip install mypy",
            file=sys.stderr,
        )
        print("Or install with mypyc support: pip install loosehtml[mypyc]", file=sys.stderr)
        sys.exit(1)

    # Verify all modules exist
    for module_path in MYPYC_MODULES:
        if not Path(module_path).exists():
            print(f"ERROR: Module not found: {module_path}", file=sys.stderr)
            sys.exit(1)

    print("=" * 70)
    print("Building loosehtml with mypyc compilation")
    print("=" * 70)
    print(f"Compiling {len(MYPYC_MODULES)} modules:")
    for module in MYPYC_MODULES:
        print(f"  - {module}")
    print("=" * 70)

    opt_level = os.environ.get("MYPYC_OPT_LEVEL", "3")
    debug_level = os.environ.get("MYPYC_DEBUG_LEVEL", "0")

    mypyc_options = {
        "opt_level": opt_level,
        "debug_level": debug_level,
        "verbose": True,
        "separate": False,
        "multi_file": False,
    }

    return mypycify(MYPYC_MODULES, **mypyc_options)


if __name__ == "__main__":
    ext_modules = []

    if USE_MYPYC:
        ext_modules = build_with_mypyc()
    else:
        print("Building loosehtml in pure Python mode (no mypyc compilation)")
        print("To enable mypyc: LOOSEHTML_USE_MYPYC=1 pip install .")

    setup(
        name="loosehtml",
        version="0.1.0",
        description="A forgiving single-pass HTML parser with a strict mode for well-formedness checks",
        package_dir={"": "src"},
        packages=find_packages("src"),
        python_requires=">=3.9",
        extras_require={
            "mypyc": ["mypy"],
            "test": ["pytest"],
            "fuzz": ["html5lib", "beautifulsoup4"],
        },
        ext_modules=ext_modules,
    )
