"""Graph module: metadata providers, reference resolution and closures."""

from .provider import TypeMetadataProvider, TypeUnresolved
from .loader import load_schema, load_roots
from .index import TypeIndex
from .runtime import RuntimeTypeProvider
from .dependency_graph import DependencyGraph, ROOT_EDGE_WEIGHT, DEFAULT_EDGE_WEIGHT
from .resolver import DirectReferenceResolver, TypeDescriptor
from .closure import ClosureEngine
from .context import AnalysisContext

__all__ = [
    "TypeMetadataProvider",
    "TypeUnresolved",
    "load_schema",
    "load_roots",
    "TypeIndex",
    "RuntimeTypeProvider",
    "DependencyGraph",
    "ROOT_EDGE_WEIGHT",
    "DEFAULT_EDGE_WEIGHT",
    "DirectReferenceResolver",
    "TypeDescriptor",
    "ClosureEngine",
    "AnalysisContext",
]
