"""Text rendering for single EmmyLua annotation elements.

Every function here is pure: it receives already-resolved strings and model
objects and returns the annotation text, newline-terminated. Dumpers decide
what to render and in which order.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..models import Method, Parameter
from .luatypes import to_lua_name, to_lua_type

SOURCE_SCHEME = "file://"
EVENT_TYPE = "EventObject"


def format_comment(summary: str, location: str = "", indent: int = 0) -> str:
    """Render a documentation summary and source location as comment lines."""
    pad = " " * indent
    lines: List[str] = []
    if summary:
        lines.extend(f"{pad}---{line}" for line in summary.split("\n"))
    if location.startswith(SOURCE_SCHEME):
        escaped = location.replace('"', "'")
        lines.append(f'{pad}---@source "{escaped}"')
    return _join(lines)


def format_type_header(
    tag: str,
    full_name: str,
    base: str = "",
    interfaces: Sequence[str] = (),
    generics: Sequence[str] = (),
) -> str:
    header = f"---@{tag} {full_name}"
    if generics:
        header += f"<{', '.join(generics)}>"
    parents = ([base] if base else []) + list(interfaces)
    if parents:
        header += f": {', '.join(parents)}"
    return header + "\n"


def format_field(type_name: str, owner: str, name: str) -> str:
    return f"---@type {to_lua_type(type_name)}\n{owner}.{name} = nil\n\n"


def format_event(type_name: str, owner: str, name: str) -> str:
    return f"---@type {to_lua_type(type_name)}|{EVENT_TYPE}\n{owner}.{name} = nil\n\n"


def format_params(params: Iterable[Parameter]) -> str:
    """One ``@param`` line per input parameter; ``out`` parameters are skipped."""
    lines: List[str] = []
    for param in params:
        if param.is_out:
            continue
        line = f"---@param {to_lua_name(param.name)} {to_lua_type(param.type_name)}"
        if param.summary:
            line += " " + param.summary.replace("\n", "\n---")
        lines.append(line)
    return _join(lines)


def format_return(return_type: str, params: Iterable[Parameter] = ()) -> str:
    """Render the return annotation; ``out`` parameters become extra return values."""
    values = [to_lua_type(return_type)]
    values.extend(to_lua_type(param.type_name) for param in params if param.is_out)
    return f"---@return {', '.join(values)}\n"


def format_function(owner: str, name: str, params: Iterable[Parameter], is_static: bool) -> str:
    separator = "." if is_static else ":"
    names = ", ".join(to_lua_name(param.name) for param in params if not param.is_out)
    return f"function {owner}{separator}{name}({names})\nend\n\n"


def format_method(owner: str, method: Method, *, is_static: bool | None = None) -> str:
    """Render the full annotation block of one method."""
    static = method.is_static if is_static is None else is_static
    return (
        format_comment(method.summary, method.location)
        + format_params(method.params)
        + format_return(method.return_type, method.params)
        + format_function(owner, method.name, method.params, static)
    )


def format_signature(params: Iterable[Parameter]) -> str:
    return ", ".join(f"{param.name}: {to_lua_type(param.type_name)}" for param in params)


def format_constructor_overloads(full_name: str, constructors: Sequence[Method]) -> str:
    """One ``@overload`` per constructor, or a single no-argument overload."""
    if not constructors:
        return f"---@overload fun(): {full_name}\n"
    return _join(
        f"---@overload fun({format_signature(ctor.params)}): {full_name}" for ctor in constructors
    )


def format_factory(owner: str, full_name: str) -> str:
    """Explicit ``New()`` constructor function used by bindings that expose one."""
    return (
        f"---Create a new instance of {full_name}\n"
        f"---@return {full_name}\n"
        f"function {owner}.New()\nend\n\n"
    )


def format_delegate_alias(name: str, invoke: Method) -> str:
    return (
        f"---@alias {name} fun({format_signature(invoke.params)}): "
        f"{to_lua_type(invoke.return_type)}\n"
    )


def format_enum_member(name: str, value: object, *, indent: int = 0, separator: str = "") -> str:
    rendered = f'"{value}"' if isinstance(value, str) else value
    return f"{' ' * indent}{name} = {rendered}{separator}\n"


def _join(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


__all__ = [
    "format_comment",
    "format_constructor_overloads",
    "format_delegate_alias",
    "format_enum_member",
    "format_event",
    "format_factory",
    "format_field",
    "format_function",
    "format_method",
    "format_params",
    "format_return",
    "format_signature",
    "format_type_header",
]
