"""Evaluate an outline document and show how each subtree contributes.

Usage:
    python examples/run_budget.py examples/budget.txt
"""

import sys

from sigma import Settings, VariableStore, build_tree, format_table, render_rows


def run(path: str):
    store = VariableStore()
    outline = build_tree(open(path).read(), store)

    print(format_table(render_rows(outline, store), Settings(show_row_index=True)))

    print(f"\n{'=' * 40}")
    print("SHARE OF TOTAL")
    print(f"{'=' * 40}")
    for line in outline.children_of(outline.root):
        share = 100 * line.result / outline.total if outline.total else 0
        print(f"{line.source.strip():<20} {store.format(line.result):>10} {share:>6.1f}%")

    errors = [line for line in outline.walk() if line.error]
    if errors:
        print("\nLines with errors:")
        for line in errors:
            print(f"  row {line.row_number}: {line.error}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python run_budget.py <document>")
        sys.exit(1)

    run(sys.argv[1])
