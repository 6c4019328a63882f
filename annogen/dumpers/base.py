"""Shared traversal and chunked output for annotation dumpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from ..config import DEFAULT_CHUNK_SIZE
from ..emit import formatter
from ..emit.templating import render_template
from ..emit.tracker import TypeReferenceTracker
from ..logging import get_logger
from ..models import (
    AnyType,
    ClassType,
    DelegateType,
    EnumType,
    Field,
    InterfaceType,
    Method,
)
from .chunks import ChunkWriter
from .namespaces import NamespaceRegistry


class DumpError(RuntimeError):
    """Raised when a dump run cannot complete; ``result`` holds the partial outcome."""

    def __init__(self, message: str, result: "DumpResult | None" = None) -> None:
        super().__init__(message)
        self.result = result
        # Filled in by the orchestrator with the run-level counts.
        self.summary: Any = None


@dataclass
class DumpResult:
    """Outcome of a single dumper run."""

    flavor: str
    output_dir: Path
    chunk_files: List[Path] = field(default_factory=list)
    namespace_file: Optional[Path] = None
    unexported_file: Optional[Path] = None
    emitted: int = 0
    failed: int = 0
    unexported_types: List[str] = field(default_factory=list)

    @property
    def unexported_count(self) -> int:
        return len(self.unexported_types)


class Dumper(ABC):
    """Contract for flavors that turn a catalog into EmmyLua definition files.

    A run walks the declarations once, in order. Each declaration is rendered
    to its own text piece; a declaration that fails to render is logged and
    skipped. Pieces are collected by a :class:`ChunkWriter`, after which the
    namespace index and the unexported-type stubs are written.
    """

    name: str = ""
    header: str = "---@meta\n"
    namespace_template: str = ""

    def __init__(
        self,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        extra_primitives: Iterable[str] = (),
    ) -> None:
        self.chunk_size = chunk_size
        self.extra_primitives = tuple(extra_primitives)
        self.logger = get_logger(f"dumpers.{self.name}")
        self.tracker = TypeReferenceTracker(self.extra_primitives)
        self.namespaces = NamespaceRegistry()

    @property
    def namespace_filename(self) -> str:
        return f"{self.name}_namespace.lua"

    @property
    def unexported_filename(self) -> str:
        return f"{self.name}_noexport_types.lua"

    def dump(self, types: Sequence[AnyType], output_dir: Path | str) -> DumpResult:
        """Write chunk files, the namespace index and unexported stubs for ``types``."""
        output = Path(output_dir)
        result = DumpResult(flavor=self.name, output_dir=output)
        self.tracker = TypeReferenceTracker(self.extra_primitives)
        self.namespaces = NamespaceRegistry()

        try:
            output.mkdir(parents=True, exist_ok=True)
            self.tracker.collect_exported_types(types)
            writer = ChunkWriter(output, self.name, self.header, self.chunk_size)

            for decl in types:
                try:
                    piece = self.render(decl)
                except Exception as exc:
                    result.failed += 1
                    self.logger.error("Error dumping type '%s': %s", decl.name, exc)
                    self.logger.debug("Render failure for %s", decl.full_name, exc_info=True)
                    continue
                writer.append(piece + "\n")
                result.chunk_files = list(writer.files)
                result.emitted += 1

            result.chunk_files = writer.close()
            result.namespace_file = self.write_namespace_index(output)
            result.unexported_file = self.tracker.dump_unexported_types(output, self.unexported_filename)
            result.unexported_types = self.tracker.unexported_types
        except OSError as exc:
            self.logger.error("Fatal error during %s dump: %s", self.name, exc)
            raise DumpError(f"{self.name} dump failed: {exc}", result) from exc

        self.logger.info(
            "Successfully generated %d %s definition file(s).", len(result.chunk_files), self.name
        )
        self.logger.info(
            "Found %d unexported types referenced in exported types.", result.unexported_count
        )
        return result

    def write_namespace_index(self, output: Path) -> Path:
        path = output / self.namespace_filename
        text = render_template(self.namespace_template, entries=self.namespaces.items())
        path.write_text(text, encoding="utf-8")
        return path

    # ------------------------------------------------------------------
    # Per-variant dispatch

    def render(self, decl: AnyType) -> str:
        """Render one declaration, registering its namespace and references."""
        if isinstance(decl, ClassType):
            return self.render_class(decl)
        if isinstance(decl, InterfaceType):
            return self.render_interface(decl)
        if isinstance(decl, EnumType):
            return self.render_enum(decl)
        if isinstance(decl, DelegateType):
            return self.render_delegate(decl)
        raise TypeError(f"Unsupported declaration type {type(decl).__name__}")

    def render_class(self, decl: ClassType) -> str:
        self.namespaces.register(decl.namespace, decl.name)
        scope = () if decl.is_constructed_generic else tuple(decl.generic_types)
        self.track(decl.base, scope)
        self.track_all(decl.interfaces, scope)

        parts = [
            formatter.format_comment(decl.summary, decl.location),
            formatter.format_type_header(
                "class", decl.full_name, decl.base, decl.interfaces, decl.generic_types
            ),
        ]
        if not decl.is_static:
            constructors = decl.constructors
            for ctor in constructors:
                self.track_all((param.type_name for param in ctor.params), scope)
            parts.append(self.render_constructors(decl, constructors))
        parts.append(self.render_body(decl.name))
        parts.extend(self.render_member_field(decl.name, item, scope) for item in decl.fields)
        parts.extend(
            self.render_member_method(decl.name, method, scope, method.is_static)
            for method in decl.methods
            if not method.is_constructor
        )
        return "".join(parts)

    def render_interface(self, decl: InterfaceType) -> str:
        self.namespaces.register(decl.namespace, decl.name)
        self.track_all(decl.interfaces)
        parts = [
            formatter.format_comment(decl.summary, decl.location),
            formatter.format_type_header("class", decl.full_name, "", decl.interfaces),
            self.render_body(decl.name),
        ]
        parts.extend(self.render_member_field(decl.name, item) for item in decl.fields)
        parts.extend(
            self.render_member_method(decl.name, method, is_static=False) for method in decl.methods
        )
        return "".join(parts)

    def render_delegate(self, decl: DelegateType) -> str:
        self.namespaces.register(decl.namespace, decl.name)
        self.track(decl.invoke.return_type)
        self.track_all(param.type_name for param in decl.invoke.params)
        return formatter.format_comment(decl.summary, decl.location) + formatter.format_delegate_alias(
            decl.full_name, decl.invoke
        )

    @abstractmethod
    def render_enum(self, decl: EnumType) -> str:
        """Render an enum declaration in the flavor's convention."""

    @abstractmethod
    def render_constructors(self, decl: ClassType, constructors: List[Method]) -> str:
        """Render constructor annotations for a non-static class."""

    @abstractmethod
    def render_body(self, name: str) -> str:
        """Render the table that holds a type's members."""

    def render_field(self, owner: str, item: Field) -> str:
        return formatter.format_field(item.type_name, owner, item.name)

    # ------------------------------------------------------------------
    # Helpers

    def render_member_field(self, owner: str, item: Field, scope: Iterable[str] = ()) -> str:
        self.track(item.type_name, scope)
        return formatter.format_comment(item.summary, item.location) + self.render_field(owner, item)

    def render_member_method(
        self, owner: str, method: Method, scope: Iterable[str] = (), is_static: bool = False
    ) -> str:
        self.track(method.return_type, scope)
        self.track_all((param.type_name for param in method.params), scope)
        return formatter.format_method(owner, method, is_static=is_static)

    def track(self, type_name: str, scope: Iterable[str] = ()) -> None:
        self.tracker.check_and_record_type(type_name, scope)

    def track_all(self, type_names: Iterable[str], scope: Iterable[str] = ()) -> None:
        scope = tuple(scope)
        for type_name in type_names:
            self.tracker.check_and_record_type(type_name, scope)

    @staticmethod
    def enum_member_type(decl: EnumType, item: Field) -> str:
        return item.type_name or decl.full_name


__all__ = ["Dumper", "DumpError", "DumpResult"]
