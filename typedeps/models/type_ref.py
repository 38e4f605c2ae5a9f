"""Type reference and member data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, order=True)
class TypeRef:
    """Fully-qualified identifier of a type in the analyzed universe."""

    name: str

    @property
    def simple_name(self) -> str:
        """Return the last component of the name (nested `$` or dotted)."""
        return self.name.replace("$", ".").rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FieldInfo:
    """Field declared directly on a type."""

    name: str
    type: Optional[TypeRef]
    modifiers: frozenset[str] = frozenset()
    # Remaining members when the declared type is a union
    extra_types: tuple[TypeRef, ...] = ()


@dataclass(frozen=True)
class MethodInfo:
    """Method declared directly on a type.

    ``extra_types`` holds union members of the return and parameter types
    beyond the first, so ``param_types`` keeps one entry per argument.
    """

    name: str
    return_type: Optional[TypeRef]
    param_types: tuple[Optional[TypeRef], ...] = ()
    exception_types: tuple[TypeRef, ...] = ()
    modifiers: frozenset[str] = frozenset()
    extra_types: tuple[TypeRef, ...] = ()

    @property
    def arg_count(self) -> int:
        return len(self.param_types)


@dataclass(frozen=True)
class ConstructorInfo:
    """Constructor declared directly on a type."""

    param_types: tuple[Optional[TypeRef], ...] = ()
    exception_types: tuple[TypeRef, ...] = ()
    modifiers: frozenset[str] = frozenset()
    extra_types: tuple[TypeRef, ...] = ()
