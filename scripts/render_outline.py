"""
Parse a word-processing XML file and print its outline and statistics.

Usage:
    python scripts/render_outline.py path/to/document.xml [--expand-all]
"""
import logging
import sys
from pathlib import Path

from lattice.hierarchy import DocumentTree
from lattice.loaders import LoaderError
from lattice.pipeline import parse_document


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    path = Path(sys.argv[1])
    try:
        result = parse_document(path)
    except LoaderError as e:
        print(f"ERROR: {e}")
        if e.details:
            print(f"  {e.details}")
        return 1

    tree = DocumentTree(result.nodes)
    expanded = None
    if "--expand-all" in sys.argv[2:]:
        expanded = {node.id: True for node in tree.iter_nodes()}

    print("=" * 80)
    print(f"DOCUMENT: {result.source_name}")
    print("=" * 80)
    print()
    print(tree.render_outline(expanded))
    print()

    stats = result.statistics
    print("DOCUMENT ANALYSIS:")
    print(f"  Paragraphs: {stats.paragraphs}")
    print(f"  Headings: {stats.headings}")
    print(f"  List items: {stats.list_items}")
    print(f"  Processing time: {stats.processing_time_ms} ms")
    print(f"  Tree: {tree.total_nodes} nodes, depth {tree.max_depth + 1}, {tree.leaf_count} leaves")
    print()
    print(stats.summary())

    for warning in result.warnings:
        print(f"WARNING: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
