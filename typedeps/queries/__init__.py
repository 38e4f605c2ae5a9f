"""Query classes for typedeps."""

from .base import Query
from .resolve import ResolveQuery
from .references import ReferencesQuery
from .closure import ClosureQuery
from .metrics import MetricsQuery
from .analyze import AnalyzeQuery

__all__ = [
    "Query",
    "ResolveQuery",
    "ReferencesQuery",
    "ClosureQuery",
    "MetricsQuery",
    "AnalyzeQuery",
]
