"""Type metadata provider interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..models import TypeRef, FieldInfo, MethodInfo, ConstructorInfo


class TypeUnresolved(LookupError):
    """A requested name does not correspond to any known type."""

    def __init__(self, name: str):
        super().__init__(f"Type not found: {name}")
        self.name = name


class TypeMetadataProvider(ABC):
    """Answers "what does this type look like" for the analysis.

    Every per-type query raises TypeUnresolved when the provider cannot
    describe the given type.
    """

    @abstractmethod
    def resolve(self, name: str) -> TypeRef:
        """Return the TypeRef for an exact type name."""

    @abstractmethod
    def fields(self, type_ref: TypeRef) -> Sequence[FieldInfo]:
        pass

    @abstractmethod
    def methods(self, type_ref: TypeRef) -> Sequence[MethodInfo]:
        pass

    @abstractmethod
    def constructors(self, type_ref: TypeRef) -> Sequence[ConstructorInfo]:
        pass

    @abstractmethod
    def interfaces(self, type_ref: TypeRef) -> Sequence[TypeRef]:
        pass

    @abstractmethod
    def super_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        pass

    @abstractmethod
    def declaring_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        pass

    @abstractmethod
    def enclosing_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        pass

    @abstractmethod
    def nested_types(self, type_ref: TypeRef) -> Sequence[TypeRef]:
        pass

    @abstractmethod
    def modifiers(self, type_ref: TypeRef) -> frozenset[str]:
        """Modifiers of the type itself (``interface``, ``abstract``, ...)."""

    @abstractmethod
    def is_primitive_or_array(self, type_ref: TypeRef) -> bool:
        pass

    def search(self, query: str) -> list[TypeRef]:
        """Return candidate types for a possibly partial name.

        The default only accepts exact names.
        """
        try:
            return [self.resolve(query.strip())]
        except TypeUnresolved:
            return []
