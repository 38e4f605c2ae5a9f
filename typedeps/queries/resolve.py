"""Type name resolution query."""

from ..models import ResolveResult
from .base import Query


class ResolveQuery(Query[ResolveResult]):
    """Resolve a type name to its candidate types."""

    def execute(self, name: str) -> ResolveResult:
        """Execute type resolution.

        Args:
            name: Type name to resolve (fully-qualified, any case, or simple).

        Returns:
            ResolveResult with list of matching candidates.
        """
        candidates = self.provider.search(name)
        return ResolveResult(query=name, candidates=candidates)
