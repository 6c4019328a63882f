"""Annotation text rendering and reference bookkeeping shared by every flavor."""

from .formatter import (
    format_comment,
    format_constructor_overloads,
    format_delegate_alias,
    format_event,
    format_factory,
    format_field,
    format_method,
    format_type_header,
)
from .luatypes import to_lua_name, to_lua_type
from .tracker import TypeReferenceTracker, base_type_name

__all__ = [
    "TypeReferenceTracker",
    "base_type_name",
    "format_comment",
    "format_constructor_overloads",
    "format_delegate_alias",
    "format_event",
    "format_factory",
    "format_field",
    "format_method",
    "format_type_header",
    "to_lua_name",
    "to_lua_type",
]
