"""Tests for catalog loading, export selection and extension folding."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from annogen.catalog import CatalogError, load_catalog, parse_catalog, select_exported
from annogen.models import ClassType, DelegateType, EnumType, InterfaceType, ParamKind


def test_load_catalog_reads_every_declaration_kind(catalog_builder) -> None:
    catalog_builder.add(
        "class",
        "Animal",
        namespace="Zoo",
        summary="An animal.",
        location="file:///src/Animal.cs",
        base="Zoo.Creature",
        interfaces=["Zoo.INamed"],
        fields=[{"name": "Age", "type": "int"}, {"name": "Born", "type": "System.Action", "is_event": True}],
        methods=[
            {"name": ".ctor", "params": [{"name": "name", "type": "string"}]},
            {
                "name": "TryFeed",
                "return_type": "bool",
                "is_static": True,
                "params": [{"name": "amount", "type": "int", "kind": "out"}],
            },
        ],
    )
    catalog_builder.add("struct", "Point", fields=[{"name": "X", "type": "float"}])
    catalog_builder.add("interface", "INamed", namespace="Zoo", methods=[{"name": "GetName", "return_type": "string"}])
    catalog_builder.add("enum", "Color", fields=[{"name": "Red", "constant": 1}, {"name": "Green", "constant": 2}])
    catalog_builder.add(
        "delegate",
        "Callback",
        invoke={"return_type": "void", "params": [{"name": "value", "type": "int"}]},
    )

    catalog = catalog_builder.load()

    assert catalog.symbol_count == 5
    assert catalog.exported is None
    animal, point, named, color, callback = catalog.types
    assert isinstance(animal, ClassType)
    assert animal.full_name == "Zoo.Animal"
    assert animal.summary == "An animal."
    assert animal.base == "Zoo.Creature"
    assert animal.fields[1].is_event is True
    assert [ctor.params[0].name for ctor in animal.constructors] == ["name"]
    assert animal.methods[1].is_static is True
    assert animal.methods[1].params[0].kind is ParamKind.OUT
    assert isinstance(point, ClassType)
    assert isinstance(named, InterfaceType)
    assert named.methods[0].return_type == "string"
    assert isinstance(color, EnumType)
    assert [item.constant for item in color.fields] == [1, 2]
    assert isinstance(callback, DelegateType)
    assert callback.invoke.name == "Invoke"
    assert callback.invoke.return_type == "void"
    assert callback.invoke.params[0].type_name == "int"


def test_load_catalog_reads_yaml(catalog_builder) -> None:
    catalog_builder.add("class", "Animal").set("exported", ["Animal"])

    catalog = catalog_builder.load("catalog.yaml")

    assert [decl.name for decl in catalog.types] == ["Animal"]
    assert catalog.exported == ("Animal",)


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "nope.json")


def test_load_catalog_rejects_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogError):
        load_catalog(path)


def test_parse_catalog_defaults() -> None:
    catalog = parse_catalog({"types": [{"kind": "class", "name": "Empty", "methods": [{"name": "Run"}]}]})

    method = catalog.types[0].methods[0]
    assert method.return_type == "void"
    assert method.params == []
    assert method.is_static is False


@pytest.mark.parametrize("kind", [None, "", "none", "VALUE"])
def test_parse_catalog_value_parameter_kinds(kind) -> None:
    catalog = parse_catalog(
        {
            "types": [
                {
                    "kind": "class",
                    "name": "A",
                    "methods": [{"name": "M", "params": [{"name": "x", "type": "int", "kind": kind}]}],
                }
            ]
        }
    )

    assert catalog.types[0].methods[0].params[0].kind is ParamKind.VALUE


def test_parse_catalog_reports_location_of_errors() -> None:
    with pytest.raises(CatalogError) as excinfo:
        parse_catalog({"types": [{"kind": "class", "name": "Animal", "fields": [{"type": "int"}]}]})

    assert "types[0] (Animal).fields[0]" in str(excinfo.value)


def test_parse_catalog_rejects_unknown_kind() -> None:
    with pytest.raises(CatalogError, match="unknown declaration kind"):
        parse_catalog({"types": [{"kind": "module", "name": "Thing"}]})


def test_parse_catalog_rejects_non_scalar_constant() -> None:
    with pytest.raises(CatalogError, match="constant must be a scalar"):
        parse_catalog({"types": [{"kind": "enum", "name": "E", "fields": [{"name": "A", "constant": [1]}]}]})


def test_parse_catalog_uses_doc_xml() -> None:
    catalog = parse_catalog(
        {
            "types": [
                {
                    "kind": "class",
                    "name": "Animal",
                    "doc_xml": "<summary>Lives in the zoo.</summary>",
                    "methods": [
                        {
                            "name": "Feed",
                            "doc_xml": '<member><summary>Feeds it.</summary><param name="amount">Grams.</param></member>',
                            "params": [{"name": "amount", "type": "int"}],
                        }
                    ],
                }
            ]
        }
    )

    animal = catalog.types[0]
    assert animal.summary == "Lives in the zoo."
    assert animal.methods[0].summary == "Feeds it."
    assert animal.methods[0].params[0].summary == "Grams."


def test_select_exported_matches_full_or_bare_name() -> None:
    types = [ClassType(name="Animal", namespace="Zoo"), ClassType(name="Keeper", namespace="Zoo"), ClassType(name="Cage")]

    assert select_exported(types, None) == types
    assert [decl.name for decl in select_exported(types, ["Zoo.Animal", "Cage"])] == ["Animal", "Cage"]
    assert [decl.name for decl in select_exported(types, ["Keeper"])] == ["Keeper"]


def test_extension_methods_are_folded_as_instance_methods() -> None:
    catalog = parse_catalog(
        {
            "types": [{"kind": "class", "name": "Animal", "namespace": "Zoo"}],
            "extension_methods": [
                {
                    "target": "Animal",
                    "method": {"name": "Describe", "return_type": "string", "is_static": True},
                }
            ],
        }
    )

    method = catalog.types[0].methods[0]
    assert method.name == "Describe"
    assert method.is_static is False


def test_extension_methods_without_target_are_dropped(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="annogen")

    catalog = parse_catalog(
        {
            "types": [{"kind": "enum", "name": "Color"}],
            "extension_methods": [{"target": "Color", "method": {"name": "Describe"}}],
        }
    )

    assert catalog.types[0].fields == []
    assert "Dropping extension method Describe" in caplog.text
