"""Flavor dumpers and discovery of dumper plugins."""

from __future__ import annotations

from importlib import metadata
from typing import Any, Callable, Dict, Iterable, Type

from .base import DumpError, Dumper, DumpResult
from .tolua import ToLuaDumper
from .xlua import XLuaDumper

_ENTRY_POINT_GROUP = "annogen.dumpers"

_BUILTIN_DUMPERS: Dict[str, Type[Dumper]] = {
    "xlua": XLuaDumper,
    "tolua": ToLuaDumper,
}


def discover_dumpers() -> Dict[str, Callable[..., Dumper]]:
    """Return dumper factories keyed by flavor name.

    Built-in flavors come first; plugins registered under the
    ``annogen.dumpers`` entry-point group are added after them and cannot
    shadow a built-in name.
    """
    factories: Dict[str, Callable[..., Dumper]] = dict(_BUILTIN_DUMPERS)
    for entry in _iter_entry_points():
        key = entry.name.lower()
        if key in factories:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load dumper entry point '{entry.name}': {exc}") from exc
        factories[key] = _coerce_factory(entry.name, loaded)
    return factories


def get_dumper(flavor: str, **options: Any) -> Dumper:
    """Instantiate the dumper registered for ``flavor``."""
    factories = discover_dumpers()
    key = (flavor or "").strip().lower()
    factory = factories.get(key)
    if factory is None:
        available = ", ".join(sorted(factories))
        raise ValueError(f"Unknown flavor '{flavor}'. Available flavors: {available}")
    instance = factory(**options)
    if not isinstance(instance, Dumper):
        raise TypeError(f"Dumper factory for '{flavor}' did not return a Dumper instance")
    return instance


def available_flavors() -> list[str]:
    return list(discover_dumpers())


def _coerce_factory(name: str, obj: object) -> Callable[..., Dumper]:
    if isinstance(obj, type) and issubclass(obj, Dumper):
        return obj
    if callable(obj):
        return obj  # type: ignore[return-value]
    raise TypeError(f"Dumper entry point '{name}' must be a Dumper subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "DumpError",
    "DumpResult",
    "Dumper",
    "ToLuaDumper",
    "XLuaDumper",
    "available_flavors",
    "discover_dumpers",
    "get_dumper",
]
