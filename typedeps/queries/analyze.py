"""Multi-root analysis query."""

import logging
from typing import Iterable, Optional

from ..graph import TypeUnresolved
from ..models import TypeRef, AnalysisResult
from .base import Query
from .metrics import MetricsQuery

logger = logging.getLogger(__name__)


class AnalyzeQuery(Query[AnalysisResult]):
    """Analyze a list of root types and read out the dependency graph."""

    def execute(self, names: Iterable[str], depth: Optional[int] = None) -> AnalysisResult:
        """Execute the analysis.

        All names are resolved before any traversal so edge weighting knows
        the complete set of roots. Unresolvable names are skipped.

        Args:
            names: Root type names. Duplicates and blank names are ignored.
            depth: Expansion bound, -1 for unbounded. Defaults to the
                configured depth.

        Returns:
            AnalysisResult with one metrics row per analyzed root and the
            node/edge tables of the whole graph.
        """
        if depth is None:
            depth = self.config.depth
        result = AnalysisResult(max_depth=depth)

        seen: set[str] = set()
        roots: list[TypeRef] = []
        for name in names:
            name = name.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            try:
                type_ref = self.provider.resolve(name)
            except TypeUnresolved:
                logger.warning(f"Skipping unresolved root type: {name}")
                result.unresolved.append(name)
                continue
            if type_ref not in roots:
                roots.append(type_ref)
                self.graph.add_root(type_ref)

        metrics_query = MetricsQuery(self.context)
        for type_ref in roots:
            try:
                result.metrics.append(metrics_query.execute(type_ref, depth=depth))
            except TypeUnresolved as e:
                logger.warning(f"Skipping root type without metadata: {e.name}")
                result.unresolved.append(type_ref.name)
                continue
            result.roots.append(type_ref)

        result.nodes = self.graph.export_nodes()
        result.edges = self.graph.export_edges()
        return result
