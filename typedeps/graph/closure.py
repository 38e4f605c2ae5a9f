"""Bounded, cycle-safe dependency closure."""

import logging
from collections import deque
from typing import TYPE_CHECKING

from .provider import TypeUnresolved
from ..config import UNBOUNDED
from ..models import TypeRef, Exploration

if TYPE_CHECKING:
    from .context import AnalysisContext

logger = logging.getLogger(__name__)


class ClosureEngine:
    """Expands direct references transitively up to a depth bound.

    A type reached at depth ``d`` is expanded only when ``d <= max_depth``
    (or the bound is UNBOUNDED); types reached past the bound are reported
    but not expanded. The root is never part of its own closure.
    """

    def __init__(self, context: "AnalysisContext"):
        self.context = context

    def closure(self, root: TypeRef, max_depth: int = UNBOUNDED) -> frozenset[TypeRef]:
        """Return every type associated with ``root`` within ``max_depth``.

        Raises:
            TypeUnresolved: If ``root`` itself cannot be described.
            ValueError: If ``max_depth`` is below UNBOUNDED.
        """
        return self.explore(root, max_depth).types

    def explore(self, root: TypeRef, max_depth: int = UNBOUNDED) -> Exploration:
        """Run one closure traversal and merge its findings into the graph."""
        if max_depth < UNBOUNDED:
            raise ValueError(f"max_depth must be -1 (unbounded) or >= 0, got {max_depth}")

        resolver = self.context.resolver
        adjacency: dict[TypeRef, frozenset[TypeRef]] = {}
        depths = {root: 0}
        parents: dict[TypeRef, TypeRef] = {}
        unresolved: set[TypeRef] = set()

        # Marked on enqueue so no type is scheduled twice, cycles included
        visited = {root}
        worklist = deque([(root, 0)])

        while worklist:
            current, depth = worklist.popleft()
            if max_depth != UNBOUNDED and depth > max_depth:
                continue

            try:
                direct = resolver.direct_references(current)
            except TypeUnresolved:
                if current == root:
                    raise
                logger.debug(f"Skipping unresolved type {current} (referenced by {parents.get(current)})")
                unresolved.add(current)
                continue

            adjacency[current] = direct
            for ref in sorted(direct):
                if ref in visited:
                    continue
                visited.add(ref)
                depths[ref] = depth + 1
                parents[ref] = current
                worklist.append((ref, depth + 1))

        types = self._reachable(root, adjacency)

        if self.context.config.transitive_edges:
            for expanded in adjacency:
                reached = types if expanded == root else self._reachable(expanded, adjacency)
                self.context.graph.add_all(reached, expanded)

        return Exploration(
            root=root,
            max_depth=max_depth,
            types=types,
            adjacency=adjacency,
            depths=depths,
            parents=parents,
            unresolved=unresolved,
        )

    @staticmethod
    def _reachable(start: TypeRef, adjacency: dict[TypeRef, frozenset[TypeRef]]) -> frozenset[TypeRef]:
        """Types reachable from ``start`` over the explored edges, minus ``start``."""
        seen: set[TypeRef] = set()
        stack = list(adjacency.get(start, ()))
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(adjacency.get(current, ()))
        seen.discard(start)
        return frozenset(seen)
