"""Query result types."""

from dataclasses import dataclass, field
from typing import Optional

from .type_ref import TypeRef


@dataclass
class ResolveResult:
    """Result of type name resolution."""

    query: str
    candidates: list[TypeRef]

    @property
    def found(self) -> bool:
        return len(self.candidates) > 0

    @property
    def unique(self) -> bool:
        return len(self.candidates) == 1


@dataclass
class ReferencesResult:
    """Direct references of a type, plus the referrers seen so far."""

    target: TypeRef
    references: list[TypeRef] = field(default_factory=list)
    referrers: list[TypeRef] = field(default_factory=list)


@dataclass
class Exploration:
    """Everything one closure traversal discovered.

    ``adjacency`` only holds expanded types; leaves reached at the depth
    cutoff and unresolved neighbors appear in ``types`` but not as keys.
    """

    root: TypeRef
    max_depth: int
    types: frozenset[TypeRef]
    adjacency: dict[TypeRef, frozenset[TypeRef]] = field(default_factory=dict)
    depths: dict[TypeRef, int] = field(default_factory=dict)
    parents: dict[TypeRef, TypeRef] = field(default_factory=dict)
    unresolved: set[TypeRef] = field(default_factory=set)

    def is_expanded(self, type_ref: TypeRef) -> bool:
        return type_ref in self.adjacency


@dataclass
class ClosureEntry:
    """Single closure entry with tree support."""

    depth: int
    type_ref: TypeRef
    expanded: bool
    unresolved: bool = False
    children: list["ClosureEntry"] = field(default_factory=list)


@dataclass
class ClosureTreeResult:
    """Result of closure query with tree structure."""

    target: TypeRef
    max_depth: int
    types: list[TypeRef] = field(default_factory=list)
    tree: list[ClosureEntry] = field(default_factory=list)
    unresolved: list[TypeRef] = field(default_factory=list)


@dataclass
class TypeMetrics:
    """Structural metrics for one type."""

    type_ref: TypeRef
    methods: int = 0
    constructors: int = 0
    public_methods: int = 0
    private_methods: int = 0
    static_methods: int = 0
    abstract_methods: int = 0
    native_methods: int = 0
    synchronized_methods: int = 0
    final_methods: int = 0
    members: int = 0
    public_members: int = 0
    private_members: int = 0
    protected_members: int = 0
    static_members: int = 0
    final_members: int = 0
    interface_types: int = 0
    abstract_types: int = 0
    direct_associations: int = 0
    indirect_associations: int = 0
    method_args: list[tuple[str, int]] = field(default_factory=list)


# Column headers for the per-type report, in TypeMetrics field order.
METRIC_COLUMNS: list[tuple[str, str]] = [
    ("type", "class"),
    ("methods", "methods"),
    ("constructors", "constructors"),
    ("public_methods", "public methods"),
    ("private_methods", "private methods"),
    ("static_methods", "static methods"),
    ("abstract_methods", "abstract methods"),
    ("native_methods", "native methods"),
    ("synchronized_methods", "synchronized methods"),
    ("final_methods", "final methods"),
    ("members", "members"),
    ("public_members", "public members"),
    ("private_members", "private members"),
    ("protected_members", "protected members"),
    ("static_members", "static members"),
    ("final_members", "final members"),
    ("interface_types", "interface classes"),
    ("abstract_types", "abstract classes"),
    ("direct_associations", "directly associated classes"),
    ("indirect_associations", "indirectly associated classes"),
]


@dataclass
class NodeRow:
    """Graph node with its connection count."""

    type_ref: TypeRef
    connections: int


@dataclass
class EdgeRow:
    """Graph edge pointing from the referrer to the referenced type."""

    source: TypeRef
    target: TypeRef
    weight: int


@dataclass
class AnalysisResult:
    """Result of a multi-root analysis run."""

    max_depth: int
    roots: list[TypeRef] = field(default_factory=list)
    metrics: list[TypeMetrics] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    nodes: list[NodeRow] = field(default_factory=list)
    edges: list[EdgeRow] = field(default_factory=list)

    def metrics_for(self, name: str) -> Optional[TypeMetrics]:
        for row in self.metrics:
            if row.type_ref.name == name:
                return row
        return None
