"""Core data models shared across annogen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

CONSTRUCTOR_NAME = ".ctor"
GENERIC_ARITY_MARKER = "`"


class ParamKind(str, Enum):
    """How an argument is passed to the host method."""

    VALUE = "value"
    REF = "ref"
    OUT = "out"
    IN = "in"


class TypeKind(str, Enum):
    """Closed set of declaration variants understood by the dumpers."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"


@dataclass
class Parameter:
    """A single method or delegate parameter."""

    name: str
    type_name: str
    optional: bool = False
    kind: ParamKind = ParamKind.VALUE
    summary: str = ""

    @property
    def is_out(self) -> bool:
        return self.kind is ParamKind.OUT


@dataclass
class Field:
    """A field, property or event. Enum members carry their constant."""

    name: str
    type_name: str
    summary: str = ""
    location: str = ""
    is_event: bool = False
    constant: Optional[Union[int, float, str]] = None


@dataclass
class Method:
    """A method signature; constructors use ``CONSTRUCTOR_NAME``."""

    name: str
    return_type: str = "void"
    params: List[Parameter] = field(default_factory=list)
    is_static: bool = False
    summary: str = ""
    location: str = ""

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR_NAME


@dataclass
class TypeDeclaration:
    """Common header of every declaration in the catalog."""

    name: str
    namespace: str = ""
    summary: str = ""
    location: str = ""

    kind = TypeKind.CLASS

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass
class ClassType(TypeDeclaration):
    """Class or struct declaration.

    ``generic_types`` holds concrete type arguments for constructed generics and
    parameter names once the type has been turned into a generic definition.
    """

    base: str = ""
    interfaces: List[str] = field(default_factory=list)
    generic_types: List[str] = field(default_factory=list)
    generic_parameter_names: List[str] = field(default_factory=list)
    is_static: bool = False
    is_constructed_generic: bool = False
    fields: List[Field] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)

    kind = TypeKind.CLASS

    @property
    def constructors(self) -> List[Method]:
        return [method for method in self.methods if method.is_constructor]


@dataclass
class InterfaceType(TypeDeclaration):
    interfaces: List[str] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)

    kind = TypeKind.INTERFACE


@dataclass
class EnumType(TypeDeclaration):
    fields: List[Field] = field(default_factory=list)

    kind = TypeKind.ENUM


@dataclass
class DelegateType(TypeDeclaration):
    invoke: Method = field(default_factory=lambda: Method(name="Invoke"))

    kind = TypeKind.DELEGATE


AnyType = Union[ClassType, InterfaceType, EnumType, DelegateType]


__all__ = [
    "AnyType",
    "CONSTRUCTOR_NAME",
    "ClassType",
    "DelegateType",
    "EnumType",
    "Field",
    "GENERIC_ARITY_MARKER",
    "InterfaceType",
    "Method",
    "ParamKind",
    "Parameter",
    "TypeDeclaration",
    "TypeKind",
]
