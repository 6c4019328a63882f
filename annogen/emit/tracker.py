"""Track type names referenced by exported declarations but never exported."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Set

from ..logging import get_logger
from ..models import TypeDeclaration
from .luatypes import HOST_TO_LUA, LUA_BUILTIN_TYPES
from .templating import render_template

logger = get_logger("tracker")

_TRAILING_QUALIFIERS = ("?", "*", "&")


def base_type_name(type_name: str) -> str:
    """Reduce a display string to the name of the type it is built on.

    ``Foo.Bar<int>[]`` becomes ``Foo.Bar``; nullable, pointer and by-ref
    suffixes are dropped as well.
    """
    text = (type_name or "").strip()
    changed = True
    while text and changed:
        changed = False
        if text.endswith(_TRAILING_QUALIFIERS):
            text = text[:-1].rstrip()
            changed = True
        elif text.endswith("]") and "[" in text:
            text = text[: text.rfind("[")].rstrip()
            changed = True
    generic_start = text.find("<")
    if generic_start != -1:
        text = text[:generic_start]
    return text.strip()


class TypeReferenceTracker:
    """Two-pass bookkeeping of exported and merely referenced type names."""

    def __init__(self, extra_primitives: Iterable[str] = ()) -> None:
        self._exported: Set[str] = set()
        self._unexported: Dict[str, None] = {}
        self._collected = False
        self._primitives = set(HOST_TO_LUA) | set(LUA_BUILTIN_TYPES) | set(extra_primitives)

    def collect_exported_types(self, types: Iterable[TypeDeclaration]) -> None:
        """Pass 1: remember the full name of every declaration that will be emitted."""
        for decl in types:
            self._exported.add(decl.full_name)
        self._collected = True
        logger.debug("Collected %d exported type names", len(self._exported))

    def check_and_record_type(self, type_name: str, scope: Iterable[str] = ()) -> None:
        """Pass 2: record ``type_name`` when it refers to a type nobody exports.

        ``scope`` lists generic parameter names visible at the reference site;
        they are never recorded.
        """
        if not self._collected:
            raise RuntimeError("collect_exported_types() must run before references are checked")
        name = base_type_name(type_name)
        if not name or name in self._primitives or name in self._exported:
            return
        if name in scope:
            return
        if name not in self._unexported:
            logger.debug("Recording unexported type reference %s", name)
            self._unexported[name] = None

    def is_exported(self, type_name: str) -> bool:
        return base_type_name(type_name) in self._exported

    @property
    def unexported_types(self) -> List[str]:
        return list(self._unexported)

    @property
    def unexported_count(self) -> int:
        return len(self._unexported)

    def get_unexported_type_count(self) -> int:
        return self.unexported_count

    def dump_unexported_types(self, path: Path | str, filename: str) -> Path:
        """Write one stub class declaration per unexported reference."""
        target = Path(path) / filename
        target.write_text(render_template("unexported.lua.j2", names=self.unexported_types), encoding="utf-8")
        return target


__all__ = ["TypeReferenceTracker", "base_type_name"]
