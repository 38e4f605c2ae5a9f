"""JSON loading utilities for type schema and roots files.

Uses msgspec for typed decoding straight into structs.
"""

from pathlib import Path
from typing import Optional

import msgspec


class FieldSpec(msgspec.Struct, omit_defaults=True):
    """Field specification in the type schema."""

    name: str
    type: str
    modifiers: list[str] = []


class MethodSpec(msgspec.Struct, omit_defaults=True):
    """Method specification in the type schema."""

    name: str
    returns: str = "void"
    params: list[str] = []
    throws: list[str] = []
    modifiers: list[str] = []


class ConstructorSpec(msgspec.Struct, omit_defaults=True):
    """Constructor specification in the type schema."""

    params: list[str] = []
    throws: list[str] = []
    modifiers: list[str] = []


class TypeSpec(msgspec.Struct, omit_defaults=True):
    """Type specification in the type schema.

    ``declaring`` is the type this one is a member of; ``enclosing`` is only
    needed when it differs (e.g. local or anonymous classes).
    """

    name: str
    kind: str = "class"  # "class", "interface", "enum", "annotation", "record"
    modifiers: list[str] = []
    extends: Optional[str] = None
    implements: list[str] = []
    declaring: Optional[str] = None
    enclosing: Optional[str] = None
    nested: list[str] = []
    fields: list[FieldSpec] = []
    methods: list[MethodSpec] = []
    constructors: list[ConstructorSpec] = []


class SchemaSpec(msgspec.Struct, omit_defaults=True):
    """Full type schema specification."""

    version: str = "1.0"
    metadata: dict = {}
    primitives: list[str] = []
    types: list[TypeSpec] = []


# Create reusable decoder for performance
_decoder = msgspec.json.Decoder(SchemaSpec)


def load_schema(path: str | Path) -> SchemaSpec:
    """Load a type schema from a JSON file.

    Args:
        path: Path to the schema JSON file.

    Returns:
        Parsed SchemaSpec struct.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON.
        msgspec.ValidationError: If the JSON does not match the schema.
    """
    with open(path, "rb") as f:
        return _decoder.decode(f.read())


def load_roots(path: str | Path) -> list[str]:
    """Read root type names, one per line.

    Blank lines and lines starting with ``//`` or ``#`` are skipped.
    """
    roots = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            name = line.strip()
            if not name or name.startswith(("//", "#")):
                continue
            roots.append(name)
    return roots
