#!/usr/bin/env python3
"""
Basic decision tree example showing how dtreelib builds and walks a tree.

This example demonstrates:
- Building an indexed tree with chained appends
- Looking nodes up by id
- Walking the tree with a caller-supplied operator
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dtreelib import DT, Operator, Traverse, TreeConfig, get_tree_stats


def build_shipping_tree() -> DT:
    """Pick a shipping option from parcel weight (kg), then distance (km)."""
    root = DT.init("shipping", TreeConfig.indexed_tree())
    root.add("letter", 0.5, id="letter").add("parcel", 20, id="parcel").add("freight", 1000, id="freight")

    root.find("parcel").add("parcel-local", 50, id="parcel-local").add("parcel-national", 1500, id="parcel-national")
    root.find("freight").add("freight-road", 2000, id="freight-road")
    return root


def main():
    """Decide shipping for a few parcels."""
    if "-v" in sys.argv:
        logging.basicConfig(level=logging.DEBUG)

    tree = build_shipping_tree()
    stats = get_tree_stats(tree)
    print(f"Tree: {stats['total_nodes']} nodes, {stats['leaf_nodes']} leaves, depth {stats['max_depth']}")
    print("-" * 50)

    for weight, distance in [(0.2, 10), (12, 30), (12, 900), (300, 1200), (5000, 10)]:
        cursor = Traverse.start(tree)
        # value < decision: first option whose limit is above the input
        steps = list(cursor.run([weight, distance], Operator.LESS))
        choice = cursor.current()
        print(f"  {weight:>7} kg, {distance:>5} km -> {choice.data} ({len(steps)} step(s))")


if __name__ == "__main__":
    main()
