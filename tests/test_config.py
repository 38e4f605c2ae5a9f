"""Tests for analysis configuration."""

import json

import pytest

from typedeps.config import AnalysisConfig, ConfigError, load_config


class TestAnalysisConfig:
    def test_defaults(self):
        config = AnalysisConfig()
        assert config.depth == -1
        assert config.transitive_edges
        assert config.is_hierarchy_root("java.lang.Object")
        assert config.is_hierarchy_root("builtins.object")
        assert not config.is_hierarchy_root("lib.Item")

    def test_include_hierarchy_root(self):
        config = AnalysisConfig(include_hierarchy_root=True)
        assert not config.is_hierarchy_root("java.lang.Object")

    def test_invalid_depth(self):
        with pytest.raises(ValueError):
            AnalysisConfig(depth=-2)


class TestLoadConfig:
    def test_load(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"depth": 2, "primitives": ["Money"], "output_dir": "out"}))
        config = load_config(path)
        assert config.depth == 2
        assert config.primitives == ["Money"]
        assert config.output_dir == "out"
        assert config.transitive_edges

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.json")

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"dept": 2}))
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_depth(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"depth": -5}))
        with pytest.raises(ConfigError):
            load_config(path)
