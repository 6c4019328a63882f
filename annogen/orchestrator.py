"""Pipeline orchestration: catalog -> generic merge -> flavor dump."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .catalog import Catalog, load_catalog, select_exported
from .config import AnnogenConfig, load_config
from .dumpers import DumpError, DumpResult, get_dumper
from .logging import get_logger
from .merger import GenericMerger
from .models import AnyType


@dataclass
class RunSummary:
    """Counts reported at the end of (or up to the failure of) a run."""

    flavor: str
    output_dir: Optional[Path] = None
    symbols_analyzed: int = 0
    types_exported: int = 0
    type_definitions: int = 0
    merged_instances: int = 0
    generated_files: List[Path] = field(default_factory=list)
    unexported_count: int = 0
    failed_types: int = 0

    def lines(self) -> List[str]:
        return [
            f"Analyzed {self.symbols_analyzed} symbols, produced {self.type_definitions} type definitions.",
            f"Merged {self.merged_instances} generic type instance(s).",
            f"Generated {len(self.generated_files)} {self.flavor} definition file(s).",
            f"Found {self.unexported_count} unexported types referenced in exported types.",
        ]


@dataclass
class PreparedTypes:
    """Declarations ready to be dumped, plus the counts gathered on the way."""

    types: List[AnyType]
    symbol_count: int
    exported_count: int
    merged_count: int


class Orchestrator:
    """Coordinates catalog loading, generic merging and dumping for one or more runs."""

    def __init__(self, config: AnnogenConfig | None = None) -> None:
        self.config = config
        self.logger = get_logger("orchestrator")

    def prepare(
        self,
        catalog: Catalog,
        *,
        merge_generics: bool = True,
        exported: Optional[List[str]] = None,
    ) -> PreparedTypes:
        """Select exported declarations and merge generic instantiations."""
        names = exported if exported is not None else catalog.exported
        selected = select_exported(catalog.types, names)
        if names is not None:
            self.logger.debug("Kept %d of %d declarations as exported", len(selected), len(catalog.types))

        merged_count = 0
        types = selected
        if merge_generics:
            merger = GenericMerger()
            types = merger.process(selected)
            merged_count = merger.merged_count
        return PreparedTypes(
            types=types,
            symbol_count=catalog.symbol_count,
            exported_count=len(selected),
            merged_count=merged_count,
        )

    def run(
        self,
        catalog_path: Path | str,
        output_dir: Path | str | None = None,
        *,
        flavor: str | None = None,
        chunk_size: int | None = None,
        merge_generics: bool | None = None,
    ) -> RunSummary:
        """Run the whole pipeline and return the summary.

        Raises :class:`DumpError` on fatal failure; its ``summary`` attribute
        holds the counts accumulated before the failure.
        """
        catalog_path = Path(catalog_path).expanduser().resolve()
        config = self.config or load_config(catalog_path.parent)
        effective_flavor = (flavor or config.flavor).lower()
        summary = RunSummary(flavor=effective_flavor)

        self.logger.info("Loading catalog %s", catalog_path)
        catalog = load_catalog(catalog_path)

        prepared = self.prepare(
            catalog,
            merge_generics=config.merge_generics if merge_generics is None else merge_generics,
            exported=config.exported,
        )
        summary.symbols_analyzed = prepared.symbol_count
        summary.types_exported = prepared.exported_count
        summary.type_definitions = len(prepared.types)
        summary.merged_instances = prepared.merged_count
        self.logger.info(
            "Successfully analyzed %d symbols, produced %d type definitions.",
            summary.symbols_analyzed,
            summary.type_definitions,
        )

        dumper = get_dumper(
            effective_flavor,
            chunk_size=chunk_size or config.chunk_size,
            extra_primitives=config.extra_primitives,
        )
        output = config.resolve_output(output_dir)
        summary.output_dir = output
        self.logger.info("Generating %s bindings into %s", effective_flavor, output)

        try:
            result = dumper.dump(prepared.types, output)
        except DumpError as exc:
            if exc.result is not None:
                self._apply_result(summary, exc.result)
            exc.summary = summary
            self.logger.error(
                "Run stopped after %d generated file(s) and %d emitted type(s)",
                len(summary.generated_files),
                exc.result.emitted if exc.result is not None else 0,
            )
            raise
        except Exception as exc:
            self.logger.error("Fatal error: %s", exc)
            error = DumpError(f"{effective_flavor} dump failed: {exc}")
            error.summary = summary
            raise error from exc

        self._apply_result(summary, result)
        if summary.failed_types:
            self.logger.warning("%d type(s) could not be rendered and were skipped", summary.failed_types)
        self.logger.info("Generation completed successfully!")
        return summary

    @staticmethod
    def _apply_result(summary: RunSummary, result: DumpResult) -> None:
        summary.generated_files = list(result.chunk_files)
        summary.unexported_count = result.unexported_count
        summary.failed_types = result.failed


__all__ = ["Orchestrator", "PreparedTypes", "RunSummary"]
