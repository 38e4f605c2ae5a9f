"""Metadata provider backed by live Python introspection.

Types are addressed by dotted ``module.Qualname`` paths. Python has no
declared exceptions, so methods never report exception types.
"""

import abc
import importlib
import inspect
import logging
import sys
import types
import typing
from typing import Any, Iterable, Optional

from .provider import TypeMetadataProvider, TypeUnresolved
from ..models import TypeRef, FieldInfo, MethodInfo, ConstructorInfo

logger = logging.getLogger(__name__)

PRIMITIVES = frozenset({
    "builtins.int",
    "builtins.float",
    "builtins.complex",
    "builtins.bool",
    "builtins.str",
    "builtins.bytes",
    "builtins.NoneType",
})

CONTAINERS = frozenset({
    "builtins.list",
    "builtins.tuple",
    "builtins.dict",
    "builtins.set",
    "builtins.frozenset",
    "builtins.bytearray",
})

# Bases that carry no structural meaning of their own
_HELPER_BASES = (object, typing.Generic, typing.Protocol, abc.ABC)

_UNION_TYPES = (typing.Union, types.UnionType)


def type_name(cls: type) -> str:
    """Return the dotted name used as TypeRef for a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _visibility(name: str, owner: Optional[type] = None) -> str:
    """Visibility by naming convention; ``owner`` unmangles ``__private`` names."""
    if owner is not None and name.startswith(f"_{owner.__name__.lstrip('_')}__"):
        return "private"
    if name.startswith("__") and not name.endswith("__"):
        return "private"
    if name.startswith("_") and not name.startswith("__"):
        return "protected"
    return "public"


def _annotations(obj: Any, owner: Optional[type] = None) -> dict[str, Any]:
    """Own annotations of a class or function, evaluated where possible.

    String annotations are evaluated one by one against the defining module
    and the class namespace. One that fails (a name imported only under
    TYPE_CHECKING, say) becomes ``Any`` without affecting the others.
    """
    raw = inspect.get_annotations(obj)
    if not any(isinstance(value, str) for value in raw.values()):
        return raw

    if inspect.isclass(obj):
        module = sys.modules.get(obj.__module__)
        globalns = vars(module) if module is not None else {}
        owner = obj
    else:
        globalns = getattr(inspect.unwrap(obj), "__globals__", {})
    localns = {owner.__name__: owner, **vars(owner)} if owner is not None else {}

    result = {}
    for name, value in raw.items():
        if isinstance(value, str):
            try:
                value = eval(value, globalns, localns)
            except Exception as e:  # string annotations may name anything
                logger.debug(f"Cannot evaluate annotation {name}: {value!r} of {obj!r}: {e}")
                value = typing.Any
        result[name] = value
    return result


def _is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


class RuntimeTypeProvider(TypeMetadataProvider):
    """Describes importable Python classes."""

    def __init__(self, import_paths: Iterable[str] = ()):
        """Initialize the provider.

        Args:
            import_paths: Directories prepended to ``sys.path`` so that the
                analyzed project's modules can be imported.
        """
        for path in import_paths:
            if path not in sys.path:
                sys.path.insert(0, path)
        self._classes: dict[TypeRef, type] = {}

    # ------------------------------------------------------------------
    # Name <-> class mapping
    # ------------------------------------------------------------------

    def _register(self, cls: type) -> TypeRef:
        ref = TypeRef(type_name(cls))
        self._classes.setdefault(ref, cls)
        return ref

    def _import(self, name: str) -> Optional[type]:
        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            module = sys.modules.get(module_name)
            if module is None:
                try:
                    module = importlib.import_module(module_name)
                except ImportError:
                    continue
            obj: Any = module
            for attr in parts[split:]:
                obj = getattr(obj, attr, None)
                if obj is None:
                    break
            if inspect.isclass(obj):
                return obj
        return None

    def _class(self, type_ref: TypeRef) -> type:
        cls = self._classes.get(type_ref)
        if cls is None:
            cls = self._import(type_ref.name)
            if cls is None:
                raise TypeUnresolved(type_ref.name)
            self._classes[type_ref] = cls
        return cls

    def _annotation_refs(self, annotation: Any) -> list[TypeRef]:
        """Map a type annotation to the TypeRefs it names.

        ``Optional[X]`` maps to ``X`` and other unions to each member;
        parameterized generics map to an array-like placeholder; anything
        else that is not a class, ``Any`` included, is dropped.
        """
        if annotation is None or annotation is type(None):
            return [TypeRef("builtins.NoneType")]
        if annotation is typing.Any:
            return []
        origin = typing.get_origin(annotation)
        if origin in (typing.ClassVar, typing.Final, typing.Annotated):
            args = typing.get_args(annotation)
            return self._annotation_refs(args[0]) if args else []
        if origin in _UNION_TYPES:
            refs: list[TypeRef] = []
            for arg in typing.get_args(annotation):
                if arg is not type(None):
                    refs.extend(self._annotation_refs(arg))
            return list(dict.fromkeys(refs))
        if origin is not None:
            return [TypeRef(repr(annotation))]
        if inspect.isclass(annotation):
            return [self._register(annotation)]
        return []

    # ------------------------------------------------------------------
    # TypeMetadataProvider
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> TypeRef:
        return self._register(self._class(TypeRef(name)))

    def fields(self, type_ref: TypeRef) -> list[FieldInfo]:
        cls = self._class(type_ref)
        result = []
        for name, annotation in _annotations(cls).items():
            modifiers = {_visibility(name, cls)}
            origin = typing.get_origin(annotation)
            if origin is typing.ClassVar or annotation is typing.ClassVar:
                modifiers.add("static")
            if origin is typing.Final or annotation is typing.Final:
                modifiers.add("final")
            refs = self._annotation_refs(annotation)
            result.append(
                FieldInfo(
                    name=name,
                    type=refs[0] if refs else None,
                    modifiers=frozenset(modifiers),
                    extra_types=tuple(refs[1:]),
                )
            )
        return result

    def _callable_info(self, func: Any, bound: bool, owner: type):
        """Parameter refs (without self/cls), return ref and further union members."""
        annotations = _annotations(func, owner)
        try:
            params = list(inspect.signature(func).parameters.values())
        except (TypeError, ValueError):
            params = []
        if bound and params:
            params = params[1:]

        param_types = []
        extra_types: list[TypeRef] = []
        for param in params:
            refs = self._annotation_refs(annotations[param.name]) if param.name in annotations else []
            param_types.append(refs[0] if refs else None)
            extra_types.extend(refs[1:])

        return_type = None
        if "return" in annotations:
            refs = self._annotation_refs(annotations["return"])
            return_type = refs[0] if refs else None
            extra_types.extend(refs[1:])
        return tuple(param_types), return_type, tuple(extra_types)

    def _members(self, cls: type):
        """Yield (name, function, modifiers, bound) for callables in the class body."""
        for name, attr in vars(cls).items():
            modifiers = {_visibility(name, cls)}
            bound = True
            if isinstance(attr, staticmethod):
                func = attr.__func__
                modifiers.add("static")
                bound = False
            elif isinstance(attr, classmethod):
                func = attr.__func__
                modifiers.add("classmethod")
            elif isinstance(attr, property):
                func = attr.fget
                modifiers.add("property")
            elif inspect.isfunction(attr):
                func = attr
            else:
                continue
            # Skip helpers injected by metaclasses or typing (e.g. __subclasshook__)
            if func is None or not getattr(func, "__qualname__", "").startswith(f"{cls.__qualname__}."):
                continue
            if getattr(func, "__isabstractmethod__", False):
                modifiers.add("abstract")
            if getattr(func, "__final__", False):
                modifiers.add("final")
            yield name, func, frozenset(modifiers), bound

    def methods(self, type_ref: TypeRef) -> list[MethodInfo]:
        cls = self._class(type_ref)
        result = []
        for name, func, modifiers, bound in self._members(cls):
            if name == "__init__":
                continue
            param_types, return_type, extra_types = self._callable_info(func, bound, cls)
            result.append(
                MethodInfo(
                    name=name,
                    return_type=return_type,
                    param_types=param_types,
                    modifiers=modifiers,
                    extra_types=extra_types,
                )
            )
        return result

    def constructors(self, type_ref: TypeRef) -> list[ConstructorInfo]:
        cls = self._class(type_ref)
        for name, func, modifiers, bound in self._members(cls):
            if name == "__init__":
                param_types, _, extra_types = self._callable_info(func, bound, cls)
                return [
                    ConstructorInfo(
                        param_types=param_types,
                        modifiers=modifiers,
                        extra_types=extra_types,
                    )
                ]
        return []

    def _bases(self, cls: type) -> list[type]:
        return [b for b in cls.__bases__ if b not in _HELPER_BASES]

    def interfaces(self, type_ref: TypeRef) -> list[TypeRef]:
        cls = self._class(type_ref)
        return [self._register(b) for b in self._bases(cls) if _is_protocol(b)]

    def super_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        cls = self._class(type_ref)
        if cls is object:
            return None
        for base in self._bases(cls):
            if not _is_protocol(base):
                return self._register(base)
        return self._register(object)

    def declaring_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        cls = self._class(type_ref)
        qualname = cls.__qualname__
        if "." not in qualname or "<locals>" in qualname:
            return None
        parent = TypeRef(f"{cls.__module__}.{qualname.rsplit('.', 1)[0]}")
        try:
            return self._register(self._class(parent))
        except TypeUnresolved:
            return None

    def enclosing_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        # Classes defined inside functions have no enclosing type
        return self.declaring_type(type_ref)

    def nested_types(self, type_ref: TypeRef) -> list[TypeRef]:
        cls = self._class(type_ref)
        return [
            self._register(attr)
            for name, attr in vars(cls).items()
            if inspect.isclass(attr) and attr.__qualname__ == f"{cls.__qualname__}.{name}"
        ]

    def modifiers(self, type_ref: TypeRef) -> frozenset[str]:
        cls = self._class(type_ref)
        modifiers = {_visibility(cls.__name__)}
        if _is_protocol(cls):
            modifiers.update(("interface", "abstract"))
        elif inspect.isabstract(cls):
            modifiers.add("abstract")
        if getattr(cls, "__final__", False):
            modifiers.add("final")
        return frozenset(modifiers)

    def is_primitive_or_array(self, type_ref: TypeRef) -> bool:
        name = type_ref.name
        return name in PRIMITIVES or name in CONTAINERS or "[" in name
