"""Tests for single-element annotation rendering."""

from __future__ import annotations

from annogen.emit import formatter
from annogen.models import Method, ParamKind, Parameter


def test_format_comment_summary_and_source() -> None:
    text = formatter.format_comment("Moves.\nFast.", 'file:///src/"Mover".cs', indent=4)

    assert text == "    ---Moves.\n    ---Fast.\n    ---@source \"file:///src/'Mover'.cs\"\n"


def test_format_comment_ignores_non_file_locations() -> None:
    assert formatter.format_comment("", "Assembly-CSharp.dll") == ""
    assert formatter.format_comment("Hi.") == "---Hi.\n"


def test_format_type_header_variants() -> None:
    assert formatter.format_type_header("class", "Animal") == "---@class Animal\n"
    assert (
        formatter.format_type_header("class", "Zoo.Dog", "Zoo.Animal", ["Zoo.INamed", "IComparable"])
        == "---@class Zoo.Dog: Zoo.Animal, Zoo.INamed, IComparable\n"
    )
    assert (
        formatter.format_type_header("class", "Zoo.Pair", "", [], ["T", "T2"])
        == "---@class Zoo.Pair<T, T2>\n"
    )


def test_format_field_and_event() -> None:
    assert formatter.format_field("int", "Animal", "Age") == "---@type integer\nAnimal.Age = nil\n\n"
    assert (
        formatter.format_event("System.Action", "Animal", "Born")
        == "---@type System.Action|EventObject\nAnimal.Born = nil\n\n"
    )


def test_format_method_with_out_parameters() -> None:
    method = Method(
        name="TryGet",
        return_type="bool",
        params=[
            Parameter(name="key", type_name="string", summary="Lookup key.\nCase sensitive."),
            Parameter(name="value", type_name="int", kind=ParamKind.OUT),
            Parameter(name="end", type_name="float", kind=ParamKind.REF),
        ],
        summary="Looks up a value.",
    )

    assert formatter.format_method("Cache", method) == (
        "---Looks up a value.\n"
        "---@param key string Lookup key.\n"
        "---Case sensitive.\n"
        "---@param _end number\n"
        "---@return boolean, integer\n"
        "function Cache:TryGet(key, _end)\n"
        "end\n\n"
    )


def test_format_method_static_override() -> None:
    method = Method(name="Create", return_type="Animal", is_static=False)

    assert formatter.format_method("Animal", method, is_static=True) == (
        "---@return Animal\nfunction Animal.Create()\nend\n\n"
    )


def test_constructor_overloads() -> None:
    ctors = [
        Method(name=".ctor"),
        Method(name=".ctor", params=[Parameter(name="name", type_name="string"), Parameter(name="age", type_name="int")]),
    ]

    assert formatter.format_constructor_overloads("Zoo.Animal", []) == "---@overload fun(): Zoo.Animal\n"
    assert formatter.format_constructor_overloads("Zoo.Animal", ctors) == (
        "---@overload fun(): Zoo.Animal\n---@overload fun(name: string, age: integer): Zoo.Animal\n"
    )


def test_format_factory() -> None:
    assert formatter.format_factory("Animal", "Zoo.Animal") == (
        "---Create a new instance of Zoo.Animal\n---@return Zoo.Animal\nfunction Animal.New()\nend\n\n"
    )


def test_format_delegate_alias() -> None:
    invoke = Method(
        name="Invoke",
        return_type="bool",
        params=[Parameter(name="sender", type_name="object"), Parameter(name="count", type_name="int")],
    )

    assert (
        formatter.format_delegate_alias("Zoo.Filter", invoke)
        == "---@alias Zoo.Filter fun(sender: any, count: integer): boolean\n"
    )


def test_format_enum_member() -> None:
    assert formatter.format_enum_member("Red", 0, indent=4, separator=",") == "    Red = 0,\n"
    assert formatter.format_enum_member("Mode.Fast", "fast") == 'Mode.Fast = "fast"\n'
