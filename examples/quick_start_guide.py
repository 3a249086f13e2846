#!/usr/bin/env python3
"""
Quick Start Guide for the Mini DOM Parser.

Walks through the three API levels: the raising ``parse()`` function, the
result-returning ``parse_string()``, and the configured ``MarkupParser``.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mini_dom_parser import (
    MarkupParseError,
    MarkupParser,
    ParserConfig,
    parse,
    parse_string,
    pretty_print,
    to_markup,
)


def quick_start_example():
    """Parse a small document and inspect the tree."""

    print("QUICK START - Mini DOM Parser")
    print("=" * 45)

    print("\nStep 1: Parsing a document")
    print("-" * 30)
    root = parse(
        '<html><body id="main"><h1>Title</h1>'
        "<!-- navigation goes here --><p class='lead'>Hello World</p></body></html>"
    )
    print(pretty_print(root))

    print("\nStep 2: Querying the tree")
    print("-" * 30)
    body = root.get_element_by_id("main")
    print(f"body children: {len(body.children)}")
    print(f"paragraph text: {root.find('p').text_content!r}")
    print(f"counts: {root.count()}")

    print("\nStep 3: Handling malformed markup")
    print("-" * 30)
    try:
        parse("<p><b>bold</p></b>")
    except MarkupParseError as e:
        print(f"parse() raised {type(e).__name__}: {e}")

    result = parse_string("<p><b>bold</p></b>")
    print(f"parse_string() success={result.success} code={result.error.code}")

    print("\nStep 4: Configured parser")
    print("-" * 30)
    parser = MarkupParser(ParserConfig.strict())
    for document in ["<a></a><b></b>", "<ul><li>one</li><li>two</ul>"]:
        result = parser.parse(document)
        status = to_markup(result.root) if result.success else str(result.error)
        print(f"{document!r} -> {status}")
    print(f"statistics: {parser.statistics}")


if __name__ == "__main__":
    quick_start_example()
