"""Tests for annogen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from annogen.config import DEFAULT_CHUNK_SIZE, AnnogenConfig, ConfigError, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, AnnogenConfig)
    assert config.root == tmp_path.resolve()
    assert config.flavor == "xlua"
    assert config.output_dir is None
    assert config.chunk_size == DEFAULT_CHUNK_SIZE == 500 * 1024
    assert config.merge_generics is True
    assert config.extra_primitives == []
    assert config.exported is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".annogen.yml"
    config_file.write_text(
        """
flavor: ToLua
output: build/annotations
chunk_size: 4096
generics:
  merge: false
references:
  primitives: [Vector3, "UnityEngine.Object"]
exported:
  - Animal
  - Game.Color
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.flavor == "tolua"
    assert config.output_dir == tmp_path.resolve() / "build" / "annotations"
    assert config.chunk_size == 4096
    assert config.merge_generics is False
    assert config.extra_primitives == ["Vector3", "UnityEngine.Object"]
    assert config.exported == ["Animal", "Game.Color"]


def test_load_config_accepts_catalog_path(tmp_path: Path) -> None:
    (tmp_path / ".annogen.yml").write_text("flavor: tolua\n", encoding="utf-8")
    catalog = tmp_path / "catalog.json"
    catalog.write_text("{}", encoding="utf-8")

    assert load_config(catalog).flavor == "tolua"


def test_load_config_accepts_explicit_yaml_file(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("generics:\n  merge: 'no'\n", encoding="utf-8")

    config = load_config(config_file)

    assert config.merge_generics is False
    assert config.root == tmp_path.resolve()


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".annogen.yml").write_text("   \n", encoding="utf-8")

    assert load_config(tmp_path).flavor == "xlua"


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".annogen.yml").write_text("- xlua\n- tolua\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".annogen.yml").write_text("flavor: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_positive_chunk_size(tmp_path: Path) -> None:
    (tmp_path / ".annogen.yml").write_text("chunk_size: 0\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_resolve_output_prefers_override(tmp_path: Path) -> None:
    config = AnnogenConfig(root=tmp_path, output_dir=tmp_path / "configured")

    assert config.resolve_output(tmp_path / "cli") == tmp_path / "cli"
    assert config.resolve_output() == tmp_path / "configured"
    assert AnnogenConfig(root=tmp_path).resolve_output() == tmp_path / "lua_annotations"
