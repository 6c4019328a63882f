"""Read type catalogs produced by the host-language analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml

from ..logging import get_logger
from ..models import (
    AnyType,
    ClassType,
    DelegateType,
    EnumType,
    Field,
    InterfaceType,
    Method,
    ParamKind,
    Parameter,
)
from .docs import Documentation, parse_documentation

logger = get_logger("catalog")

_CLASS_KINDS = {"class", "struct"}


class CatalogError(ValueError):
    """Raised when a catalog document does not describe valid declarations."""


@dataclass
class Catalog:
    """Ordered declarations read from a catalog document."""

    types: List[AnyType] = field(default_factory=list)
    exported: Optional[Tuple[str, ...]] = None
    symbol_count: int = 0


def load_catalog(path: Path | str) -> Catalog:
    """Load a JSON or YAML catalog from disk."""
    catalog_path = Path(path).expanduser()
    if not catalog_path.exists():
        raise FileNotFoundError(f"Catalog not found: {catalog_path}")
    text = catalog_path.read_text(encoding="utf-8")
    if catalog_path.suffix.lower() in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise CatalogError(f"Failed to parse {catalog_path.name}: {exc}") from exc
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CatalogError(f"Failed to parse {catalog_path.name}: {exc}") from exc
    catalog = parse_catalog(data or {})
    logger.debug("Loaded %d declarations from %s", len(catalog.types), catalog_path)
    return catalog


def parse_catalog(data: Mapping[str, Any]) -> Catalog:
    """Build a catalog from an already-decoded mapping."""
    if not isinstance(data, Mapping):
        raise CatalogError("Catalog must contain a mapping at the root")
    raw_types = data.get("types", [])
    if not isinstance(raw_types, list):
        raise CatalogError("'types' must be a list of declarations")

    types = [_parse_type(entry, index) for index, entry in enumerate(raw_types)]

    extensions = data.get("extension_methods")
    if extensions:
        if not isinstance(extensions, list):
            raise CatalogError("'extension_methods' must be a list")
        fold_extension_methods(types, extensions)

    exported_raw = data.get("exported")
    exported: Optional[Tuple[str, ...]] = None
    if exported_raw is not None:
        if not isinstance(exported_raw, list):
            raise CatalogError("'exported' must be a list of type names")
        exported = tuple(str(name) for name in exported_raw)

    return Catalog(types=types, exported=exported, symbol_count=len(types))


def select_exported(types: Sequence[AnyType], names: Iterable[str] | None) -> List[AnyType]:
    """Keep declarations named in ``names``; ``None`` keeps everything."""
    if names is None:
        return list(types)
    wanted = set(names)
    return [decl for decl in types if decl.full_name in wanted or decl.name in wanted]


def fold_extension_methods(types: Sequence[AnyType], entries: Sequence[Any]) -> None:
    """Attach extension methods to their target declarations as instance methods."""
    by_name: Dict[str, List[AnyType]] = {}
    for decl in types:
        if isinstance(decl, (ClassType, InterfaceType)):
            by_name.setdefault(decl.name, []).append(decl)

    for index, entry in enumerate(entries):
        where = f"extension_methods[{index}]"
        mapping = _require_mapping(entry, where)
        target = _require_str(mapping, "target", where)
        method = _parse_method(_require_mapping(mapping.get("method"), f"{where}.method"), f"{where}.method")
        method.is_static = False
        targets = by_name.get(target)
        if not targets:
            logger.warning("Dropping extension method %s: no declaration named %s", method.name, target)
            continue
        for decl in targets:
            decl.methods.append(method)


def _parse_type(entry: Any, index: int) -> AnyType:
    where = f"types[{index}]"
    mapping = _require_mapping(entry, where)
    kind = str(mapping.get("kind", "")).strip().lower()
    name = _require_str(mapping, "name", where)
    where = f"{where} ({name})"
    docs = _documentation(mapping)
    common = {
        "name": name,
        "namespace": _opt_str(mapping.get("namespace")),
        "summary": docs.summary,
        "location": _opt_str(mapping.get("location")),
    }

    if kind in _CLASS_KINDS:
        return ClassType(
            **common,
            base=_opt_str(mapping.get("base")),
            interfaces=_str_list(mapping.get("interfaces"), f"{where}.interfaces"),
            generic_types=_str_list(mapping.get("generic_types"), f"{where}.generic_types"),
            generic_parameter_names=_str_list(
                mapping.get("generic_parameter_names"), f"{where}.generic_parameter_names"
            ),
            is_static=bool(mapping.get("is_static", False)),
            is_constructed_generic=bool(mapping.get("is_constructed_generic", False)),
            fields=_parse_fields(mapping.get("fields"), where),
            methods=_parse_methods(mapping.get("methods"), where),
        )
    if kind == "interface":
        return InterfaceType(
            **common,
            interfaces=_str_list(mapping.get("interfaces"), f"{where}.interfaces"),
            fields=_parse_fields(mapping.get("fields"), where),
            methods=_parse_methods(mapping.get("methods"), where),
        )
    if kind == "enum":
        return EnumType(**common, fields=_parse_fields(mapping.get("fields"), where))
    if kind == "delegate":
        invoke_raw = mapping.get("invoke") or {}
        invoke = _parse_method({"name": "Invoke", **_require_mapping(invoke_raw, f"{where}.invoke")}, f"{where}.invoke")
        return DelegateType(**common, invoke=invoke)
    raise CatalogError(f"{where}: unknown declaration kind {kind!r}")


def _parse_fields(raw: Any, where: str) -> List[Field]:
    fields: List[Field] = []
    for index, entry in enumerate(_list(raw, f"{where}.fields")):
        field_where = f"{where}.fields[{index}]"
        mapping = _require_mapping(entry, field_where)
        constant = mapping.get("constant")
        if constant is not None and not isinstance(constant, (int, float, str)):
            raise CatalogError(f"{field_where}: constant must be a scalar")
        fields.append(
            Field(
                name=_require_str(mapping, "name", field_where),
                type_name=_opt_str(mapping.get("type")),
                summary=_documentation(mapping).summary,
                location=_opt_str(mapping.get("location")),
                is_event=bool(mapping.get("is_event", False)),
                constant=constant,
            )
        )
    return fields


def _parse_methods(raw: Any, where: str) -> List[Method]:
    return [
        _parse_method(_require_mapping(entry, f"{where}.methods[{index}]"), f"{where}.methods[{index}]")
        for index, entry in enumerate(_list(raw, f"{where}.methods"))
    ]


def _parse_method(mapping: Mapping[str, Any], where: str) -> Method:
    docs = _documentation(mapping)
    params: List[Parameter] = []
    for index, entry in enumerate(_list(mapping.get("params"), f"{where}.params")):
        param_where = f"{where}.params[{index}]"
        param = _require_mapping(entry, param_where)
        name = _require_str(param, "name", param_where)
        params.append(
            Parameter(
                name=name,
                type_name=_opt_str(param.get("type")),
                optional=bool(param.get("optional", False)),
                kind=_param_kind(param.get("kind"), param_where),
                summary=_opt_str(param.get("summary")) or docs.params.get(name, ""),
            )
        )
    return Method(
        name=_require_str(mapping, "name", where),
        return_type=_opt_str(mapping.get("return_type")) or "void",
        params=params,
        is_static=bool(mapping.get("is_static", False)),
        summary=docs.summary,
        location=_opt_str(mapping.get("location")),
    )


def _param_kind(value: Any, where: str) -> ParamKind:
    if value is None or value == "" or value == "none":
        return ParamKind.VALUE
    try:
        return ParamKind(str(value).lower())
    except ValueError as exc:
        raise CatalogError(f"{where}: unknown parameter kind {value!r}") from exc


def _documentation(mapping: Mapping[str, Any]) -> Documentation:
    summary = mapping.get("summary")
    if isinstance(summary, str) and summary:
        return Documentation(summary=summary)
    doc_xml = mapping.get("doc_xml")
    if isinstance(doc_xml, str):
        return parse_documentation(doc_xml)
    return Documentation()


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise CatalogError(f"{where}: expected a mapping")
    return value


def _require_str(mapping: Mapping[str, Any], key: str, where: str) -> str:
    value = mapping.get(key)
    if not isinstance(value, str) or not value:
        raise CatalogError(f"{where}: '{key}' must be a non-empty string")
    return value


def _opt_str(value: Any) -> str:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else ""


def _list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise CatalogError(f"{where}: expected a list")
    return value


def _str_list(value: Any, where: str) -> List[str]:
    return [str(item) for item in _list(value, where)]


__all__ = ["Catalog", "CatalogError", "fold_extension_methods", "load_catalog", "parse_catalog", "select_exported"]
