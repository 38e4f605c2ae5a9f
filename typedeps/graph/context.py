"""Shared analysis state."""

import threading
from typing import Optional

from .closure import ClosureEngine
from .dependency_graph import DependencyGraph
from .provider import TypeMetadataProvider
from .resolver import DirectReferenceResolver, TypeDescriptor
from ..config import AnalysisConfig
from ..models import TypeRef


class AnalysisContext:
    """Owns everything one analysis run shares between queries.

    The descriptor cache and the dependency graph only grow. Every mutation
    of either happens under ``lock``, so queries for different roots may run
    on separate threads against the same context.
    """

    def __init__(self, provider: TypeMetadataProvider, config: Optional[AnalysisConfig] = None):
        self.provider = provider
        self.config = config or AnalysisConfig()
        self.lock = threading.RLock()
        self.descriptors: dict[TypeRef, TypeDescriptor] = {}
        self.graph = DependencyGraph(lock=self.lock)
        self.resolver = DirectReferenceResolver(self)
        self.engine = ClosureEngine(self)

    def direct_references(self, type_ref: TypeRef) -> frozenset[TypeRef]:
        return self.resolver.direct_references(type_ref)

    def closure(self, root: TypeRef, max_depth: Optional[int] = None) -> frozenset[TypeRef]:
        """Closure of ``root``, defaulting to the configured depth."""
        if max_depth is None:
            max_depth = self.config.depth
        return self.engine.closure(root, max_depth)
