"""Mapping from host-language type display strings to EmmyLua type names."""

from __future__ import annotations

from typing import Dict, FrozenSet, List

_INTEGER = "integer"
_NUMBER = "number"

HOST_TO_LUA: Dict[str, str] = {
    "void": "nil",
    "System.Void": "nil",
    "bool": "boolean",
    "System.Boolean": "boolean",
    "string": "string",
    "System.String": "string",
    "char": _INTEGER,
    "System.Char": _INTEGER,
    "byte": _INTEGER,
    "System.Byte": _INTEGER,
    "sbyte": _INTEGER,
    "System.SByte": _INTEGER,
    "short": _INTEGER,
    "System.Int16": _INTEGER,
    "ushort": _INTEGER,
    "System.UInt16": _INTEGER,
    "int": _INTEGER,
    "System.Int32": _INTEGER,
    "uint": _INTEGER,
    "System.UInt32": _INTEGER,
    "long": _INTEGER,
    "System.Int64": _INTEGER,
    "ulong": _INTEGER,
    "System.UInt64": _INTEGER,
    "nint": _INTEGER,
    "nuint": _INTEGER,
    "float": _NUMBER,
    "System.Single": _NUMBER,
    "double": _NUMBER,
    "System.Double": _NUMBER,
    "decimal": _NUMBER,
    "System.Decimal": _NUMBER,
    "object": "any",
    "System.Object": "any",
    "dynamic": "any",
}

LUA_BUILTIN_TYPES: FrozenSet[str] = frozenset(
    {"nil", "any", "boolean", "string", "number", "integer", "table", "function", "thread", "userdata"}
)

LUA_KEYWORDS: FrozenSet[str] = frozenset(
    {
        "and", "break", "do", "else", "elseif", "end", "false", "for", "function", "goto",
        "if", "in", "local", "nil", "not", "or", "repeat", "return", "then", "true",
        "until", "while",
    }
)


def to_lua_type(display: str) -> str:
    """Convert a type display string such as ``List<int>[]`` to ``List<integer>[]``."""
    text = (display or "").strip()
    if not text:
        return "any"
    if text.endswith("?"):
        return f"{to_lua_type(text[:-1])}?"
    if text.endswith("]"):
        open_index = text.rfind("[")
        rank = text[open_index + 1 : -1]
        if open_index > 0 and set(rank) <= {","}:
            return f"{to_lua_type(text[:open_index])}[]"
    if text.endswith("*") or text.endswith("&"):
        return to_lua_type(text[:-1])
    if text.endswith(">") and "<" in text:
        open_index = text.index("<")
        base = text[:open_index].strip()
        arguments = split_type_arguments(text[open_index + 1 : -1])
        mapped = ", ".join(to_lua_type(argument) for argument in arguments)
        return f"{base}<{mapped}>"
    return HOST_TO_LUA.get(text, text)


def to_lua_name(name: str) -> str:
    """Return an identifier usable as a Lua parameter name."""
    return f"_{name}" if name in LUA_KEYWORDS else name


def split_type_arguments(text: str) -> List[str]:
    """Split a generic argument list on top-level commas."""
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char in "<[(":
            depth += 1
        elif char in ">])":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


__all__ = [
    "HOST_TO_LUA",
    "LUA_BUILTIN_TYPES",
    "LUA_KEYWORDS",
    "split_type_arguments",
    "to_lua_name",
    "to_lua_type",
]
