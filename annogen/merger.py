"""Collapse constructed generic instantiations into generic definitions."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Mapping, Sequence

from .logging import get_logger
from .models import GENERIC_ARITY_MARKER, AnyType, ClassType, Field, Method, Parameter

logger = get_logger("merger")


class GenericMerger:
    """Merges constructed generics that share a generic definition.

    The first instantiation of each definition becomes the canonical generic
    declaration; its concrete type arguments are replaced by parameter names in
    every member signature. Later instantiations are dropped and counted in
    ``merged_count``. Create one merger per run.
    """

    def __init__(self) -> None:
        self._definitions: Dict[str, ClassType] = {}
        self.merged_count = 0

    def process(self, types: Sequence[AnyType]) -> List[AnyType]:
        """Return a new declaration list with generic instantiations merged."""
        result: List[AnyType] = []
        for decl in types:
            if not is_merge_candidate(decl):
                result.append(decl)
                continue
            key = generic_key(decl)
            if key in self._definitions:
                self.merged_count += 1
                logger.debug("Merging %s into generic definition %s", decl.full_name, key)
                continue
            definition = to_generic_definition(decl)
            self._definitions[key] = definition
            result.append(definition)

        if self.merged_count:
            logger.info(
                "Merged %d generic type instance(s) into generic definitions.",
                self.merged_count,
            )
        return result

    @property
    def definitions(self) -> Mapping[str, ClassType]:
        return dict(self._definitions)


def is_merge_candidate(decl: AnyType) -> bool:
    return (
        isinstance(decl, ClassType)
        and decl.is_constructed_generic
        and GENERIC_ARITY_MARKER in decl.name
    )


def generic_key(decl: ClassType) -> str:
    """Return the canonical ``namespace.Name`N`` key for a generic class."""
    key = decl.full_name
    if GENERIC_ARITY_MARKER not in key and decl.generic_types:
        key += f"{GENERIC_ARITY_MARKER}{len(decl.generic_types)}"
    return key


def strip_arity_marker(name: str) -> str:
    index = name.find(GENERIC_ARITY_MARKER)
    return name[:index] if index > 0 else name


def generic_parameter_names(decl: ClassType) -> List[str]:
    """Parameter names for ``decl``: analyzer-supplied where present, else T, T2, ..."""
    supplied = decl.generic_parameter_names
    names: List[str] = []
    for index in range(len(decl.generic_types)):
        if index < len(supplied) and supplied[index]:
            names.append(supplied[index])
        else:
            names.append("T" if index == 0 else f"T{index + 1}")
    return names


def to_generic_definition(decl: ClassType) -> ClassType:
    """Build the generic definition for a constructed generic class."""
    parameters = generic_parameter_names(decl)
    type_map: Dict[str, str] = {}
    for concrete, parameter in zip(decl.generic_types, parameters):
        type_map.setdefault(concrete, parameter)

    def sub(type_name: str) -> str:
        return substitute_type_names(type_name, type_map)

    return replace(
        decl,
        name=strip_arity_marker(decl.name),
        is_constructed_generic=False,
        base=sub(decl.base),
        interfaces=[sub(name) for name in decl.interfaces],
        generic_types=list(parameters),
        generic_parameter_names=list(parameters),
        fields=[_substitute_field(item, sub) for item in decl.fields],
        methods=[_substitute_method(item, sub) for item in decl.methods],
    )


def substitute_type_names(type_name: str, type_map: Mapping[str, str]) -> str:
    """Replace concrete type names with generic parameters, longest name first.

    Replacement is plain substring substitution: a concrete name that occurs
    inside an unrelated identifier is replaced there as well.
    """
    if not type_name or not type_map:
        return type_name
    result = type_name
    for concrete in sorted(type_map, key=len, reverse=True):
        if concrete:
            result = result.replace(concrete, type_map[concrete])
    return result


def _substitute_field(item: Field, sub) -> Field:
    return replace(item, type_name=sub(item.type_name))


def _substitute_method(item: Method, sub) -> Method:
    return replace(
        item,
        return_type=sub(item.return_type),
        params=[_substitute_param(param, sub) for param in item.params],
    )


def _substitute_param(param: Parameter, sub) -> Parameter:
    return replace(param, type_name=sub(param.type_name))


__all__ = [
    "GenericMerger",
    "generic_key",
    "generic_parameter_names",
    "is_merge_candidate",
    "strip_arity_marker",
    "substitute_type_names",
    "to_generic_definition",
]
