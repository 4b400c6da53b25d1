#!/usr/bin/env python
"""Quick-start guide for bktreex library usage.

Run with: python -m bktreex

This module intentionally avoids importing bktreex internals to provide
a fast, clean startup for displaying help text.
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                 BKTREEX
          BK-tree index for approximate (edit-distance) string matching
================================================================================

INSTALLATION
------------
    pip install -e .

BASIC USAGE
-----------
    from bktreex import BKTree

    tree = BKTree()
    for word in ["cat", "cats", "bat", "bad"]:
        tree.insert(word)

    # Every word within edit distance 1 of "cat" (traversal order)
    tree.search("cat", 1)
    # [SearchResult(word='cat', distance=0), SearchResult(word='cats', distance=1),
    #  SearchResult(word='bat', distance=1)]

    # Closest words, ordered by (distance, word)
    tree.nearest("cab", k=2)

REMOVAL
-------
    tree.remove("cat")       # tombstone: hidden from results, node kept
    tree.insert("cat")       # reactivates the same node
    tree.compact()           # new tree without tombstones

RENDERING
---------
    snapshot = tree.export()     # NodeExport | None
    snapshot.to_dict()           # {"word", "deleted", "distance", "children"}

METRICS
-------
    from bktreex import BKTree, available_metrics
    available_metrics()          # ('indel', 'levenshtein')
    BKTree(metric="indel")

    Default metric: BKTREEX_METRIC (levenshtein)

CONFIGURATION
-------------
    BKTREEX_METRIC               default metric name
    BKTREEX_LOG_LEVEL            bktreex logger level (INFO)
    BKTREEX_ENABLE_DIAGNOSTICS   CPU/RSS fields in operation logs (1)

BENCHMARKING CLI
----------------
    python -m cli.bench --tree-words 5000 --queries 200 --max-distance 2
    python -m cli.bench describe

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
