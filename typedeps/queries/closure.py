"""Dependency closure query with depth and tree support."""

from typing import Optional

from ..models import TypeRef, ClosureEntry, ClosureTreeResult, Exploration
from .base import Query


class ClosureQuery(Query[ClosureTreeResult]):
    """Find every type associated with a type, as a discovery tree."""

    def execute(self, type_ref: TypeRef, depth: Optional[int] = None) -> ClosureTreeResult:
        """Execute closure query.

        Args:
            type_ref: Root type.
            depth: Expansion bound, -1 for unbounded. Defaults to the
                configured depth.

        Returns:
            ClosureTreeResult whose tree follows the first path each type
            was discovered through.
        """
        if depth is None:
            depth = self.config.depth
        exploration = self.context.engine.explore(type_ref, depth)

        return ClosureTreeResult(
            target=type_ref,
            max_depth=depth,
            types=sorted(exploration.types),
            tree=self._build_tree(exploration),
            unresolved=sorted(exploration.unresolved),
        )

    def _build_tree(self, exploration: Exploration) -> list[ClosureEntry]:
        children: dict[TypeRef, list[TypeRef]] = {}
        for child, parent in exploration.parents.items():
            children.setdefault(parent, []).append(child)

        # Iterative to keep deep chains off the call stack
        roots: list[ClosureEntry] = []
        stack: list[tuple[TypeRef, list[ClosureEntry]]] = [(exploration.root, roots)]
        while stack:
            parent, siblings = stack.pop()
            for child in sorted(children.get(parent, [])):
                entry = ClosureEntry(
                    depth=exploration.depths[child],
                    type_ref=child,
                    expanded=exploration.is_expanded(child),
                    unresolved=child in exploration.unresolved,
                )
                siblings.append(entry)
                stack.append((child, entry.children))
        return roots
