"""Shared fixtures: temporary type schemas."""

import json

import pytest

from typedeps.config import AnalysisConfig
from typedeps.graph import AnalysisContext, TypeIndex


@pytest.fixture
def write_schema(tmp_path):
    """Return a function writing a type schema and returning its path."""

    def _write(types, **extra):
        path = tmp_path / "types.json"
        data = {"version": "1.0", "metadata": {}, "types": types, **extra}
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def make_context(write_schema):
    """Return a function building an AnalysisContext over a schema."""

    def _make(types, config=None, **extra):
        index = TypeIndex(write_schema(types, **extra))
        return AnalysisContext(index, config or AnalysisConfig())

    return _make


@pytest.fixture
def library_types():
    """A small Java-like universe with nesting, interfaces and a cycle."""
    return [
        {
            "name": "lib.Library",
            "modifiers": ["public"],
            "extends": "java.lang.Object",
            "implements": ["lib.Catalog"],
            "nested": ["lib.Library$Shelf"],
            "fields": [
                {"name": "books", "type": "lib.Book[]", "modifiers": ["private"]},
                {"name": "owner", "type": "lib.Person", "modifiers": ["private", "final"]},
                {"name": "count", "type": "int", "modifiers": ["public", "static"]},
            ],
            "methods": [
                {"name": "lend", "returns": "boolean", "params": ["lib.Book", "lib.Person"],
                 "throws": ["lib.LendingException"], "modifiers": ["public", "synchronized"]},
                {"name": "size", "returns": "int", "modifiers": ["public", "final"]},
                {"name": "audit", "returns": "void", "modifiers": ["private", "static", "native"]},
            ],
            "constructors": [{"params": []}, {"params": ["lib.Person"], "modifiers": ["public"]}],
        },
        {
            "name": "lib.Library$Shelf",
            "modifiers": ["public", "static"],
            "extends": "java.lang.Object",
            "declaring": "lib.Library",
            "fields": [{"name": "label", "type": "java.lang.String"}],
        },
        {"name": "lib.Catalog", "kind": "interface", "modifiers": ["public"],
         "methods": [{"name": "size", "returns": "int", "modifiers": ["public", "abstract"]}]},
        {
            "name": "lib.Book",
            "extends": "lib.Item",
            "fields": [{"name": "author", "type": "lib.Person"}],
        },
        {"name": "lib.Item", "modifiers": ["public", "abstract"], "extends": "java.lang.Object"},
        {
            "name": "lib.Person",
            "extends": "java.lang.Object",
            "fields": [{"name": "favourite", "type": "lib.Book"}],
        },
        {"name": "lib.LendingException", "extends": "java.lang.Exception"},
    ]
