"""Global dependency graph of reverse references."""

import threading
from collections import defaultdict
from typing import Iterable

from ..models import TypeRef, NodeRow, EdgeRow

ROOT_EDGE_WEIGHT = 3
DEFAULT_EDGE_WEIGHT = 1


class DependencyGraph:
    """Accumulates which types reference which, across every closure call.

    Keys are referenced types; values are the distinct types observed to
    reference them. The graph only grows: edges are merged by set union and
    never removed. A type is never recorded as its own referrer.
    """

    def __init__(self, lock=None):
        self._referrers: dict[TypeRef, set[TypeRef]] = defaultdict(set)
        self._roots: set[TypeRef] = set()
        self._lock = lock or threading.RLock()

    def add_edge(self, referenced: TypeRef, referrer: TypeRef):
        """Record that ``referrer`` references ``referenced``."""
        if referenced == referrer:
            return
        with self._lock:
            self._referrers[referenced].add(referrer)

    def add_all(self, referenced: Iterable[TypeRef], referrer: TypeRef):
        """Record ``referrer`` against every type in ``referenced``."""
        with self._lock:
            for type_ref in referenced:
                self.add_edge(type_ref, referrer)

    def add_root(self, type_ref: TypeRef):
        """Mark a type as explicitly requested for analysis."""
        with self._lock:
            self._roots.add(type_ref)

    def is_root(self, type_ref: TypeRef) -> bool:
        return type_ref in self._roots

    @property
    def roots(self) -> frozenset[TypeRef]:
        return frozenset(self._roots)

    def referrers(self, type_ref: TypeRef) -> frozenset[TypeRef]:
        with self._lock:
            return frozenset(self._referrers.get(type_ref, ()))

    def connection_count(self, type_ref: TypeRef) -> int:
        referrers = self._referrers.get(type_ref)
        return len(referrers) if referrers else 0

    def __contains__(self, type_ref: TypeRef) -> bool:
        return type_ref in self._referrers

    def __len__(self) -> int:
        return len(self._referrers)

    def export_nodes(self) -> list[NodeRow]:
        """One row per referenced type, with its number of referrers."""
        with self._lock:
            return [
                NodeRow(type_ref=type_ref, connections=len(referrers))
                for type_ref, referrers in sorted(self._referrers.items())
            ]

    def export_edges(self) -> list[EdgeRow]:
        """One row per (referrer -> referenced) pair.

        Edges leaving an analysis root weigh ROOT_EDGE_WEIGHT, all others
        DEFAULT_EDGE_WEIGHT.
        """
        edges = []
        with self._lock:
            for target, referrers in sorted(self._referrers.items()):
                for source in sorted(referrers):
                    if source == target or not source.name or not target.name:
                        continue
                    weight = ROOT_EDGE_WEIGHT if source in self._roots else DEFAULT_EDGE_WEIGHT
                    edges.append(EdgeRow(source=source, target=target, weight=weight))
        return edges
