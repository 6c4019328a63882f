"""EmmyLua definitions for xLua bindings (types reached through ``CS.*``)."""

from __future__ import annotations

from typing import List

from ..emit import formatter
from ..models import ClassType, EnumType, Method
from .base import Dumper


class XLuaDumper(Dumper):
    """xLua flavor: local class tables, overload-only constructors, ordinal enums."""

    name = "xlua"
    header = "---@meta\n"
    namespace_template = "xlua_namespace.lua.j2"

    def render_constructors(self, decl: ClassType, constructors: List[Method]) -> str:
        return formatter.format_constructor_overloads(decl.full_name, constructors)

    def render_body(self, name: str) -> str:
        return f"local {name} = {{}}\n"

    def render_enum(self, decl: EnumType) -> str:
        self.namespaces.register(decl.namespace, decl.name)
        parts = [
            formatter.format_comment(decl.summary, decl.location),
            formatter.format_type_header("enum", decl.full_name),
            f"local {decl.name} = {{\n",
        ]
        # xLua enums are addressed by ordinal; declared constants are not consulted.
        for ordinal, item in enumerate(decl.fields):
            parts.append(formatter.format_comment(item.summary, item.location, indent=4))
            parts.append(formatter.format_enum_member(item.name, ordinal, indent=4, separator=","))
            parts.append("\n")
        parts.append("}\n")
        return "".join(parts)


__all__ = ["XLuaDumper"]
