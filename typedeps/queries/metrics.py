"""Structural metrics query."""

from typing import Iterable, Optional

from ..graph import TypeUnresolved
from ..models import TypeRef, TypeMetrics
from .base import Query


def count_with(items: Iterable, *modifiers: str) -> int:
    """Count items carrying every one of ``modifiers``."""
    required = set(modifiers)
    return sum(1 for item in items if required <= item.modifiers)


class MetricsQuery(Query[TypeMetrics]):
    """Count methods, fields and associated types of a type."""

    def execute(self, type_ref: TypeRef, depth: Optional[int] = None) -> TypeMetrics:
        """Execute metrics query.

        Computing the indirect association count runs a closure, so the
        dependency graph grows as a side effect.

        Raises:
            TypeUnresolved: If the type cannot be described.
        """
        if depth is None:
            depth = self.config.depth
        provider = self.provider

        methods = provider.methods(type_ref)
        fields = provider.fields(type_ref)
        referred = self.context.direct_references(type_ref)
        associated = self.context.engine.closure(type_ref, depth)

        return TypeMetrics(
            type_ref=type_ref,
            methods=len(methods),
            constructors=len(provider.constructors(type_ref)),
            public_methods=count_with(methods, "public"),
            private_methods=count_with(methods, "private"),
            static_methods=count_with(methods, "static"),
            abstract_methods=count_with(methods, "abstract"),
            native_methods=count_with(methods, "native"),
            synchronized_methods=count_with(methods, "synchronized"),
            final_methods=count_with(methods, "final"),
            members=len(fields),
            public_members=count_with(fields, "public"),
            private_members=count_with(fields, "private"),
            protected_members=count_with(fields, "protected"),
            static_members=count_with(fields, "static"),
            final_members=count_with(fields, "final"),
            interface_types=self._referred_with(referred, "interface"),
            abstract_types=self._referred_with(referred, "abstract"),
            direct_associations=len(referred),
            indirect_associations=len(associated),
            method_args=[(m.name, m.arg_count) for m in methods],
        )

    def method_arg_count(self, type_ref: TypeRef, method_name: str) -> int:
        """Argument count of the first method named ``method_name``, else 0."""
        try:
            methods = self.provider.methods(type_ref)
        except TypeUnresolved:
            return 0
        for method in methods:
            if method.name == method_name:
                return method.arg_count
        return 0

    def _referred_with(self, referred: Iterable[TypeRef], modifier: str) -> int:
        count = 0
        for type_ref in referred:
            try:
                if modifier in self.provider.modifiers(type_ref):
                    count += 1
            except TypeUnresolved:
                # Types outside the universe have no known modifiers
                continue
        return count
