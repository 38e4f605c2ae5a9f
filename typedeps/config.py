"""Analysis configuration.

Config file format (JSON, every key optional):
    {
        "depth": -1,
        "transitive_edges": true,
        "include_hierarchy_root": false,
        "hierarchy_roots": ["java.lang.Object", "builtins.object"],
        "primitives": [],
        "output_dir": ".",
        "schema": "/path/to/types.json",
        "import_paths": []
    }
"""

from pathlib import Path
from typing import Optional

import msgspec

UNBOUNDED = -1

DEFAULT_HIERARCHY_ROOTS = ["java.lang.Object", "builtins.object"]


class ConfigError(ValueError):
    """Raised when a config file cannot be read or decoded."""


class AnalysisConfig(msgspec.Struct, omit_defaults=True, forbid_unknown_fields=True):
    """Settings shared by every query run against one context."""

    depth: int = UNBOUNDED
    transitive_edges: bool = True
    include_hierarchy_root: bool = False
    hierarchy_roots: list[str] = msgspec.field(
        default_factory=lambda: list(DEFAULT_HIERARCHY_ROOTS)
    )
    primitives: list[str] = []
    output_dir: str = "."
    schema: Optional[str] = None
    import_paths: list[str] = []

    def __post_init__(self):
        if self.depth < UNBOUNDED:
            raise ValueError(f"depth must be -1 (unbounded) or >= 0, got {self.depth}")

    def is_hierarchy_root(self, name: str) -> bool:
        """Whether a supertype name is dropped from direct references."""
        return not self.include_hierarchy_root and name in self.hierarchy_roots


_decoder = msgspec.json.Decoder(AnalysisConfig)


def load_config(path: str | Path) -> AnalysisConfig:
    """Load an AnalysisConfig from a JSON file.

    Raises:
        ConfigError: If the file is missing or does not match the format.
    """
    try:
        with open(path, "rb") as f:
            return _decoder.decode(f.read())
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except (msgspec.DecodeError, ValueError) as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
