"""Type index over a JSON type schema."""

from collections import defaultdict
from pathlib import Path
from typing import Iterable, Optional

from .loader import load_schema, TypeSpec
from .provider import TypeMetadataProvider, TypeUnresolved
from ..models import TypeRef, FieldInfo, MethodInfo, ConstructorInfo

PRIMITIVES = frozenset(
    {"void", "boolean", "byte", "char", "short", "int", "long", "float", "double"}
)


def _ref(name: Optional[str]) -> Optional[TypeRef]:
    return TypeRef(name) if name else None


class TypeIndex(TypeMetadataProvider):
    """In-memory index over a type schema, usable as a metadata provider."""

    def __init__(self, schema_path: str | Path, extra_primitives: Iterable[str] = ()):
        """Initialize the index.

        Args:
            schema_path: Path to the type schema JSON file.
            extra_primitives: Additional names treated as primitive.
        """
        self.schema_path = Path(schema_path)
        self._extra_primitives = set(extra_primitives)
        self._load()
        self._build_indexes()

    def _load(self):
        """Load the type schema from file."""
        data = load_schema(self.schema_path)

        self.version = data.version
        self.metadata = data.metadata
        self.primitives = PRIMITIVES | set(data.primitives) | self._extra_primitives

        self.types: dict[str, TypeSpec] = {}
        for spec in data.types:
            self.types[spec.name] = spec

    def _build_indexes(self):
        """Build lookup indexes."""
        # Lowercased name to names (case-insensitive lookup)
        self.lower_to_names: dict[str, list[str]] = defaultdict(list)
        # Simple name to names
        self.simple_to_names: dict[str, list[str]] = defaultdict(list)
        # Declaring type to nested types, merged from both directions
        self.nested_by_parent: dict[str, list[str]] = defaultdict(list)

        for name, spec in self.types.items():
            ref = TypeRef(name)
            self.lower_to_names[name.lower()].append(name)
            self.simple_to_names[ref.simple_name].append(name)
            self.simple_to_names[ref.simple_name.lower()].append(name)
            for nested in spec.nested:
                if nested not in self.nested_by_parent[name]:
                    self.nested_by_parent[name].append(nested)
            if spec.declaring and name not in self.nested_by_parent[spec.declaring]:
                self.nested_by_parent[spec.declaring].append(name)

    def _spec(self, type_ref: TypeRef) -> TypeSpec:
        spec = self.types.get(type_ref.name)
        if spec is None:
            raise TypeUnresolved(type_ref.name)
        return spec

    def __len__(self) -> int:
        return len(self.types)

    def __contains__(self, name: str) -> bool:
        return name in self.types

    def resolve(self, name: str) -> TypeRef:
        if name not in self.types:
            raise TypeUnresolved(name)
        return TypeRef(name)

    def search(self, query: str) -> list[TypeRef]:
        """Resolve a possibly partial name to matching types.

        Tries the exact name, then a case-insensitive name, then the simple
        (unqualified) name.
        """
        normalized = query.strip()

        if normalized in self.types:
            return [TypeRef(normalized)]

        names = self.lower_to_names.get(normalized.lower())
        if names:
            return [TypeRef(n) for n in names]

        candidates = []
        seen = set()
        for key in (normalized, normalized.lower()):
            for name in self.simple_to_names.get(key, []):
                if name not in seen:
                    seen.add(name)
                    candidates.append(TypeRef(name))
        return candidates

    def fields(self, type_ref: TypeRef) -> list[FieldInfo]:
        return [
            FieldInfo(name=f.name, type=_ref(f.type), modifiers=frozenset(f.modifiers))
            for f in self._spec(type_ref).fields
        ]

    def methods(self, type_ref: TypeRef) -> list[MethodInfo]:
        return [
            MethodInfo(
                name=m.name,
                return_type=_ref(m.returns),
                param_types=tuple(_ref(p) for p in m.params),
                exception_types=tuple(TypeRef(t) for t in m.throws if t),
                modifiers=frozenset(m.modifiers),
            )
            for m in self._spec(type_ref).methods
        ]

    def constructors(self, type_ref: TypeRef) -> list[ConstructorInfo]:
        return [
            ConstructorInfo(
                param_types=tuple(_ref(p) for p in c.params),
                exception_types=tuple(TypeRef(t) for t in c.throws if t),
                modifiers=frozenset(c.modifiers),
            )
            for c in self._spec(type_ref).constructors
        ]

    def interfaces(self, type_ref: TypeRef) -> list[TypeRef]:
        return [TypeRef(n) for n in self._spec(type_ref).implements if n]

    def super_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        return _ref(self._spec(type_ref).extends)

    def declaring_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        return _ref(self._spec(type_ref).declaring)

    def enclosing_type(self, type_ref: TypeRef) -> Optional[TypeRef]:
        spec = self._spec(type_ref)
        return _ref(spec.enclosing or spec.declaring)

    def nested_types(self, type_ref: TypeRef) -> list[TypeRef]:
        self._spec(type_ref)
        return [TypeRef(n) for n in self.nested_by_parent.get(type_ref.name, [])]

    def modifiers(self, type_ref: TypeRef) -> frozenset[str]:
        spec = self._spec(type_ref)
        modifiers = set(spec.modifiers)
        if spec.kind in ("interface", "annotation"):
            # Interfaces are implicitly abstract
            modifiers.update(("interface", "abstract"))
        return frozenset(modifiers)

    def is_primitive_or_array(self, type_ref: TypeRef) -> bool:
        name = type_ref.name
        return name in self.primitives or name.endswith("[]") or name.startswith("[")
