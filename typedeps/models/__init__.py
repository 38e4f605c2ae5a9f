"""Data models for typedeps."""

from .type_ref import TypeRef, FieldInfo, MethodInfo, ConstructorInfo
from .results import (
    ResolveResult,
    ReferencesResult,
    Exploration,
    ClosureEntry,
    ClosureTreeResult,
    TypeMetrics,
    METRIC_COLUMNS,
    NodeRow,
    EdgeRow,
    AnalysisResult,
)

__all__ = [
    "TypeRef",
    "FieldInfo",
    "MethodInfo",
    "ConstructorInfo",
    "ResolveResult",
    "ReferencesResult",
    "Exploration",
    "ClosureEntry",
    "ClosureTreeResult",
    "TypeMetrics",
    "METRIC_COLUMNS",
    "NodeRow",
    "EdgeRow",
    "AnalysisResult",
]
