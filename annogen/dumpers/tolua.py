"""EmmyLua definitions for ToLua bindings (types published as globals)."""

from __future__ import annotations

from typing import List

from ..emit import formatter
from ..emit.luatypes import to_lua_type
from ..models import ClassType, EnumType, Field, Method
from .base import Dumper


class ToLuaDumper(Dumper):
    """ToLua flavor: global class tables, ``New()`` factories, constant-valued enums."""

    name = "tolua"
    header = "---@meta\n\n"
    namespace_template = "tolua_namespace.lua.j2"

    def render_constructors(self, decl: ClassType, constructors: List[Method]) -> str:
        return formatter.format_constructor_overloads(
            decl.full_name, constructors
        ) + formatter.format_factory(decl.name, decl.full_name)

    def render_body(self, name: str) -> str:
        return f"{name} = {{}}\n\n"

    def render_field(self, owner: str, item: Field) -> str:
        if item.is_event:
            return formatter.format_event(item.type_name, owner, item.name)
        return formatter.format_field(item.type_name, owner, item.name)

    def render_enum(self, decl: EnumType) -> str:
        self.namespaces.register(decl.namespace, decl.name)
        parts = [
            formatter.format_comment(decl.summary, decl.location),
            formatter.format_type_header("class", decl.full_name),
        ]
        for item in decl.fields:
            member_type = to_lua_type(self.enum_member_type(decl, item))
            parts.append(f"---@field public {item.name} {member_type}\n")
        parts.append(self.render_body(decl.name))
        for item in decl.fields:
            parts.append(formatter.format_comment(item.summary))
            value = item.constant if item.constant is not None else 0
            parts.append(formatter.format_enum_member(f"{decl.name}.{item.name}", value))
        parts.append("\n")
        return "".join(parts)


__all__ = ["ToLuaDumper"]
