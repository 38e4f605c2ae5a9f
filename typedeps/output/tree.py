"""Tree output formatter for closures."""

from rich.console import Console
from rich.tree import Tree

from ..models import ClosureEntry, ClosureTreeResult


def _count_tree_nodes(entries: list) -> int:
    """Count total nodes in a tree structure."""
    total = 0
    for entry in entries:
        total += 1
        if entry.children:
            total += _count_tree_nodes(entry.children)
    return total


def print_closure_tree(result: ClosureTreeResult, console: Console):
    """Print a closure as a discovery tree.

    Args:
        result: ClosureTreeResult with tree structure.
        console: Rich console for output.
    """
    root = Tree(f"[bold]{result.target.name}[/bold]")

    def add_children(parent: Tree, entries: list[ClosureEntry]):
        for entry in entries:
            # Format: [depth] name (marker)
            label = f"[dim][{entry.depth}][/dim] {entry.type_ref.name}"
            if entry.unresolved:
                label += " [yellow](unresolved)[/yellow]"
            elif not entry.expanded:
                label += " [dim](not expanded)[/dim]"

            branch = parent.add(label)
            if entry.children:
                add_children(branch, entry.children)

    add_children(root, result.tree)
    console.print(root)
    console.print(f"[dim]{len(result.types)} associated types[/dim]")


def closure_tree_to_dict(result: ClosureTreeResult) -> dict:
    """Convert closure tree to JSON-serializable dict.

    Args:
        result: ClosureTreeResult with tree structure.

    Returns:
        Dict ready for JSON serialization.
    """
    def entry_to_dict(entry: ClosureEntry) -> dict:
        return {
            "depth": entry.depth,
            "type": entry.type_ref.name,
            "expanded": entry.expanded,
            "unresolved": entry.unresolved,
            "children": [entry_to_dict(c) for c in entry.children],
        }

    return {
        "target": result.target.name,
        "max_depth": result.max_depth,
        "total": _count_tree_nodes(result.tree),
        "types": [t.name for t in result.types],
        "unresolved": [t.name for t in result.unresolved],
        "tree": [entry_to_dict(e) for e in result.tree],
    }
