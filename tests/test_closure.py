"""Tests for the dependency closure engine."""

import pytest

from typedeps.config import AnalysisConfig, UNBOUNDED
from typedeps.graph import TypeUnresolved
from typedeps.models import TypeRef
from typedeps.queries import ClosureQuery


def refs(*names):
    return frozenset(TypeRef(n) for n in names)


def field_types(name, *targets, **extra):
    """Type spec with one field per target type."""
    return {
        "name": name,
        "fields": [{"name": f"f{i}", "type": t} for i, t in enumerate(targets)],
        **extra,
    }


@pytest.fixture
def scenario_types():
    """A has a field of type B; B implements I."""
    return [
        field_types("A", "B"),
        {"name": "B", "implements": ["I"]},
        {"name": "I", "kind": "interface"},
    ]


@pytest.fixture
def diamond_types():
    """R -> L, M; L -> X; M -> X; X -> Y."""
    return [
        field_types("R", "L", "M"),
        field_types("L", "X"),
        field_types("M", "X"),
        field_types("X", "Y"),
        field_types("Y"),
    ]


class TestScenario:
    def test_depth_bounds(self, make_context, scenario_types):
        context = make_context(scenario_types, config=AnalysisConfig(transitive_edges=False))
        a = TypeRef("A")

        assert context.direct_references(a) == refs("B")
        assert context.closure(a, 0) == refs("B")
        assert context.closure(a, 1) == refs("B", "I")
        assert context.closure(a, UNBOUNDED) == refs("B", "I")

        assert context.graph.referrers(TypeRef("B")) == refs("A")
        assert context.graph.referrers(TypeRef("I")) == refs("B")
        assert context.graph.connection_count(TypeRef("B")) == 1
        assert context.graph.connection_count(TypeRef("I")) == 1

    def test_transitive_edges_record_root_context(self, make_context, scenario_types):
        context = make_context(scenario_types)
        context.closure(TypeRef("A"), UNBOUNDED)
        assert context.graph.referrers(TypeRef("B")) == refs("A")
        assert context.graph.referrers(TypeRef("I")) == refs("A", "B")

    def test_default_depth_from_config(self, make_context, scenario_types):
        context = make_context(scenario_types, config=AnalysisConfig(depth=0))
        assert context.closure(TypeRef("A")) == refs("B")


class TestCycles:
    def test_two_type_cycle(self, make_context):
        context = make_context([field_types("A", "B"), field_types("B", "A")])
        assert context.closure(TypeRef("A"), UNBOUNDED) == refs("B")
        assert context.graph.referrers(TypeRef("A")) == refs("B")
        assert context.graph.referrers(TypeRef("B")) == refs("A")

    def test_long_ring_terminates(self, make_context):
        size = 200
        types = [field_types(f"T{i}", f"T{(i + 1) % size}") for i in range(size)]
        context = make_context(types)
        result = context.closure(TypeRef("T0"), UNBOUNDED)
        assert len(result) == size - 1
        assert TypeRef("T0") not in result

    def test_no_self_edges_after_cycles(self, make_context):
        context = make_context([
            field_types("A", "B", "C"),
            field_types("B", "C", "A"),
            field_types("C", "A", "B"),
        ])
        context.closure(TypeRef("A"), UNBOUNDED)
        context.closure(TypeRef("B"), UNBOUNDED)
        assert all(e.source != e.target for e in context.graph.export_edges())


class TestDepth:
    def test_diamond_levels(self, make_context, diamond_types):
        context = make_context(diamond_types)
        r = TypeRef("R")
        assert context.closure(r, 0) == refs("L", "M")
        assert context.closure(r, 1) == refs("L", "M", "X")
        assert context.closure(r, 2) == refs("L", "M", "X", "Y")
        assert context.closure(r, UNBOUNDED) == refs("L", "M", "X", "Y")

    def test_monotonic(self, make_context, diamond_types, library_types):
        context = make_context(diamond_types + library_types)
        for root in (TypeRef("R"), TypeRef("lib.Library")):
            unbounded = context.closure(root, UNBOUNDED)
            previous = frozenset()
            for depth in range(5):
                current = context.closure(root, depth)
                assert previous <= current <= unbounded
                previous = current

    def test_boundary_type_not_expanded(self, make_context, diamond_types):
        context = make_context(diamond_types)
        exploration = context.engine.explore(TypeRef("R"), 1)
        assert TypeRef("X") in exploration.types
        assert not exploration.is_expanded(TypeRef("X"))
        assert exploration.depths[TypeRef("X")] == 2
        assert not context.resolver.is_cached(TypeRef("X"))

    def test_invalid_depth(self, make_context, diamond_types):
        context = make_context(diamond_types)
        with pytest.raises(ValueError):
            context.closure(TypeRef("R"), -2)


class TestUnresolved:
    def test_unresolved_neighbor_is_a_leaf(self, make_context, library_types):
        context = make_context(library_types)
        exploration = context.engine.explore(TypeRef("lib.Library"), UNBOUNDED)
        assert exploration.types == refs(
            "lib.Library$Shelf",
            "lib.Catalog",
            "lib.Book",
            "lib.Person",
            "lib.LendingException",
            "lib.Item",
            "java.lang.String",
            "java.lang.Exception",
        )
        assert exploration.unresolved == {TypeRef("java.lang.String"), TypeRef("java.lang.Exception")}

    def test_unresolved_root_raises(self, make_context, library_types):
        context = make_context(library_types)
        with pytest.raises(TypeUnresolved):
            context.closure(TypeRef("lib.Missing"), UNBOUNDED)

    def test_no_primitive_leakage(self, make_context, library_types):
        context = make_context(library_types)
        context.closure(TypeRef("lib.Library"), UNBOUNDED)
        index = context.provider
        graph_types = {n.type_ref for n in context.graph.export_nodes()}
        for edge in context.graph.export_edges():
            graph_types.update((edge.source, edge.target))
        assert not any(index.is_primitive_or_array(t) for t in graph_types)


class TestClosureQuery:
    def test_tree_follows_first_discovery(self, make_context, diamond_types):
        context = make_context(diamond_types)
        result = ClosureQuery(context).execute(TypeRef("R"), depth=UNBOUNDED)

        assert [e.type_ref.name for e in result.tree] == ["L", "M"]
        left, middle = result.tree
        assert [e.type_ref.name for e in left.children] == ["X"]
        assert middle.children == []
        x = left.children[0]
        assert x.depth == 2
        assert [e.type_ref.name for e in x.children] == ["Y"]
        assert result.types == sorted(refs("L", "M", "X", "Y"))

    def test_tree_marks_unresolved(self, make_context, library_types):
        context = make_context(library_types)
        result = ClosureQuery(context).execute(TypeRef("lib.Library$Shelf"), depth=0)
        names = {e.type_ref.name: e for e in result.tree}
        assert set(names) == {"lib.Library", "java.lang.String"}
        assert not names["java.lang.String"].expanded
        assert result.unresolved == []
