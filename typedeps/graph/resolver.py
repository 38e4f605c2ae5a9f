"""Direct reference resolution with per-type memoization."""

import logging
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from ..models import TypeRef

if TYPE_CHECKING:
    from .context import AnalysisContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeDescriptor:
    """Memoized direct-reference set of one type."""

    type_ref: TypeRef
    references: frozenset[TypeRef]


class DirectReferenceResolver:
    """Computes the set of types a type directly references.

    Descriptors are cached in the context for its whole lifetime. Computing a
    descriptor also records every direct reference in the dependency graph.
    """

    def __init__(self, context: "AnalysisContext"):
        self.context = context

    def direct_references(self, type_ref: TypeRef) -> frozenset[TypeRef]:
        """Return the types ``type_ref`` directly references.

        Raises:
            TypeUnresolved: If the provider cannot describe ``type_ref``.
        """
        descriptor = self.context.descriptors.get(type_ref)
        if descriptor is not None:
            return descriptor.references

        with self.context.lock:
            # Another thread may have stored it while we waited
            descriptor = self.context.descriptors.get(type_ref)
            if descriptor is None:
                logger.debug(f"Computing direct references of {type_ref}")
                references = frozenset(self._collect(type_ref))
                descriptor = TypeDescriptor(type_ref=type_ref, references=references)
                self.context.descriptors[type_ref] = descriptor
                self.context.graph.add_all(references, type_ref)
        return descriptor.references

    def is_cached(self, type_ref: TypeRef) -> bool:
        return type_ref in self.context.descriptors

    def _keep(self, type_ref: Optional[TypeRef]) -> bool:
        return type_ref is not None and not self.context.provider.is_primitive_or_array(type_ref)

    def _collect(self, type_ref: TypeRef) -> set[TypeRef]:
        provider = self.context.provider
        candidates: list[Optional[TypeRef]] = []

        candidates.append(provider.declaring_type(type_ref))
        candidates.extend(provider.nested_types(type_ref))
        candidates.extend(provider.interfaces(type_ref))

        super_type = provider.super_type(type_ref)
        if super_type is not None and not self.context.config.is_hierarchy_root(super_type.name):
            candidates.append(super_type)

        candidates.append(provider.enclosing_type(type_ref))

        for method in provider.methods(type_ref):
            candidates.append(method.return_type)
            candidates.extend(method.exception_types)
            candidates.extend(method.param_types)
            candidates.extend(method.extra_types)

        for field in provider.fields(type_ref):
            candidates.append(field.type)
            candidates.extend(field.extra_types)

        references = {c for c in candidates if self._keep(c)}
        references.discard(type_ref)
        return references
