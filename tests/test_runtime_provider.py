"""Tests for the introspection-backed provider."""

from abc import abstractmethod
from typing import ClassVar, Optional, Protocol

import pytest

from typedeps.graph import AnalysisContext, RuntimeTypeProvider, TypeUnresolved
from typedeps.graph.runtime import type_name
from typedeps.models import TypeRef


class Engine:
    horsepower: int


class Wheel:
    pass


class Drivable(Protocol):
    def drive(self, distance: float) -> None:
        ...


class Vehicle:
    wheels: list[Wheel]

    @abstractmethod
    def service(self) -> None:
        ...


class Car(Vehicle, Drivable):
    engine: Engine
    spare: Optional[Wheel]
    _mileage: int
    __vin: str
    registry: ClassVar[dict] = {}

    class Trunk:
        capacity: int

    def __init__(self, engine: Engine, spare: Optional[Wheel] = None):
        self.engine = engine
        self.spare = spare

    def drive(self, distance: float) -> None:
        pass

    def tow(self, other: "Car", rope: Wheel) -> Vehicle:
        return other

    @staticmethod
    def build(engine: Engine) -> "Car":
        return Car(engine)

    def service(self) -> None:
        pass


def ref(cls):
    return TypeRef(type_name(cls))


@pytest.fixture
def provider():
    return RuntimeTypeProvider()


class TestRuntimeProvider:
    def test_resolve(self, provider):
        assert provider.resolve(type_name(Car)) == ref(Car)

    def test_resolve_nested(self, provider):
        assert provider.resolve(type_name(Car.Trunk)) == ref(Car.Trunk)

    def test_resolve_unknown(self, provider):
        with pytest.raises(TypeUnresolved):
            provider.resolve("no_such_module_xyz.Thing")
        with pytest.raises(TypeUnresolved):
            provider.resolve(f"{__name__}.NoSuchClass")

    def test_fields(self, provider):
        fields = {f.name: f for f in provider.fields(ref(Car))}
        assert fields["engine"].type == ref(Engine)
        assert fields["spare"].type == ref(Wheel)
        assert "protected" in fields["_mileage"].modifiers
        assert "private" in fields["_Car__vin"].modifiers
        assert "static" in fields["registry"].modifiers

    def test_generic_field_is_array_like(self, provider):
        (wheels,) = provider.fields(ref(Vehicle))
        assert provider.is_primitive_or_array(wheels.type)

    def test_methods_and_constructor(self, provider):
        methods = {m.name: m for m in provider.methods(ref(Car))}
        assert "__init__" not in methods
        assert methods["tow"].param_types == (ref(Car), ref(Wheel))
        assert methods["tow"].return_type == ref(Vehicle)
        assert methods["build"].arg_count == 1
        assert "static" in methods["build"].modifiers

        (constructor,) = provider.constructors(ref(Car))
        assert constructor.param_types == (ref(Engine), ref(Wheel))

    def test_abstract_method(self, provider):
        (service,) = provider.methods(ref(Vehicle))
        assert "abstract" in service.modifiers

    def test_bases(self, provider):
        assert provider.super_type(ref(Car)) == ref(Vehicle)
        assert provider.interfaces(ref(Car)) == [ref(Drivable)]
        assert provider.super_type(ref(Engine)) == TypeRef("builtins.object")
        assert "interface" in provider.modifiers(ref(Drivable))

    def test_nesting(self, provider):
        assert provider.nested_types(ref(Car)) == [ref(Car.Trunk)]
        assert provider.declaring_type(ref(Car.Trunk)) == ref(Car)
        assert provider.declaring_type(ref(Car)) is None

    def test_primitives(self, provider):
        assert provider.is_primitive_or_array(TypeRef("builtins.int"))
        assert provider.is_primitive_or_array(TypeRef("builtins.list"))
        assert not provider.is_primitive_or_array(ref(Engine))


class TestRuntimeClosure:
    def test_direct_references(self):
        context = AnalysisContext(RuntimeTypeProvider())
        assert context.direct_references(ref(Car)) == frozenset({
            ref(Vehicle),
            ref(Drivable),
            ref(Engine),
            ref(Wheel),
            ref(Car.Trunk),
        })

    def test_closure(self):
        context = AnalysisContext(RuntimeTypeProvider())
        result = context.closure(ref(Car), -1)
        assert result == frozenset({
            ref(Vehicle),
            ref(Drivable),
            ref(Engine),
            ref(Wheel),
            ref(Car.Trunk),
        })
        assert context.graph.referrers(ref(Car)) == frozenset({ref(Car.Trunk)})


DEFERRED_MODULE = '''
from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, Optional, Union

if TYPE_CHECKING:
    from not_installed_package import Ghost


class Alpha:
    pass


class Beta:
    pass


class Holder:
    one: Alpha
    ghost: Ghost
    either: Alpha | Beta
    maybe: Optional[Union[Beta, Alpha]]
    tagged: Annotated[Beta, "tag"]
    anything: Any

    def pick(self, key: Ghost, fallback: Alpha | Beta) -> Beta | None:
        return None
'''


@pytest.fixture(scope="module")
def deferred_provider(tmp_path_factory):
    """Provider over a module using postponed annotations."""
    root = tmp_path_factory.mktemp("deferred")
    (root / "deferred_models.py").write_text(DEFERRED_MODULE)
    return RuntimeTypeProvider(import_paths=[str(root)])


def deferred(name):
    return TypeRef(f"deferred_models.{name}")


class TestPostponedAnnotations:
    def test_unresolvable_annotation_keeps_the_others(self, deferred_provider):
        fields = {f.name: f for f in deferred_provider.fields(deferred("Holder"))}
        assert fields["one"].type == deferred("Alpha")
        assert fields["ghost"].type is None
        assert fields["tagged"].type == deferred("Beta")

    def test_any_is_not_a_reference(self, deferred_provider):
        fields = {f.name: f for f in deferred_provider.fields(deferred("Holder"))}
        assert fields["anything"].type is None
        assert fields["anything"].extra_types == ()

    def test_union_members_are_all_referenced(self, deferred_provider):
        fields = {f.name: f for f in deferred_provider.fields(deferred("Holder"))}
        assert fields["either"].type == deferred("Alpha")
        assert fields["either"].extra_types == (deferred("Beta"),)
        assert fields["maybe"].type == deferred("Beta")
        assert fields["maybe"].extra_types == (deferred("Alpha"),)

    def test_method_unions_keep_argument_count(self, deferred_provider):
        (pick,) = deferred_provider.methods(deferred("Holder"))
        assert pick.arg_count == 2
        assert pick.param_types == (None, deferred("Alpha"))
        assert pick.return_type == deferred("Beta")
        assert pick.extra_types == (deferred("Beta"),)

    def test_direct_references(self, deferred_provider):
        context = AnalysisContext(deferred_provider)
        assert context.direct_references(deferred("Holder")) == frozenset({
            deferred("Alpha"),
            deferred("Beta"),
        })
