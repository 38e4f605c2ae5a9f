"""typedeps - map the structural type dependencies of a codebase."""

from .config import AnalysisConfig, load_config
from .graph import (
    AnalysisContext,
    TypeMetadataProvider,
    TypeUnresolved,
    TypeIndex,
    RuntimeTypeProvider,
    DependencyGraph,
)
from .models import TypeRef
from .queries import (
    ResolveQuery,
    ReferencesQuery,
    ClosureQuery,
    MetricsQuery,
    AnalyzeQuery,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig",
    "load_config",
    "AnalysisContext",
    "TypeMetadataProvider",
    "TypeUnresolved",
    "TypeIndex",
    "RuntimeTypeProvider",
    "DependencyGraph",
    "TypeRef",
    "ResolveQuery",
    "ReferencesQuery",
    "ClosureQuery",
    "MetricsQuery",
    "AnalyzeQuery",
]
