"""Base query interface."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..config import AnalysisConfig
from ..graph import AnalysisContext, DependencyGraph, TypeMetadataProvider

T = TypeVar("T")


class Query(ABC, Generic[T]):
    """Base query interface.

    Queries share one AnalysisContext, so anything a query resolves or
    explores is visible to the queries that run after it.
    """

    def __init__(self, context: AnalysisContext):
        self.context = context

    @property
    def provider(self) -> TypeMetadataProvider:
        return self.context.provider

    @property
    def graph(self) -> DependencyGraph:
        return self.context.graph

    @property
    def config(self) -> AnalysisConfig:
        return self.context.config

    @abstractmethod
    def execute(self, *args, **kwargs) -> T:
        """Run the query against the context."""
