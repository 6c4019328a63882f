"""CLI entrypoints for annogen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .catalog import CatalogError, load_catalog
from .config import ConfigError, load_config
from .dumpers import DumpError, available_flavors
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_catalog_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("catalog", help="Path to the JSON or YAML type catalog.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .annogen.yml (defaults to the catalog's directory).",
    )
    parser.add_argument(
        "--no-merge",
        action="store_true",
        help="Emit constructed generic instantiations as-is instead of merging them.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="annogen",
        description="Generate EmmyLua annotation files from a catalog of host-language types.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only report warnings and errors while running."
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    dump_parser = subparsers.add_parser(
        "dump",
        help="Write annotation chunks, the namespace index and unexported stubs.",
    )
    _add_verbose_option(dump_parser, suppress_default=True)
    _add_catalog_argument(dump_parser)
    dump_parser.add_argument(
        "--flavor",
        default=None,
        help="Binding flavor to emit (xlua or tolua; defaults to the configured flavor).",
    )
    dump_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output directory (created when missing).",
    )
    dump_parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="Maximum size in bytes of each generated chunk file.",
    )

    stats_parser = subparsers.add_parser(
        "stats",
        help="Load and merge the catalog without writing any files.",
    )
    _add_verbose_option(stats_parser, suppress_default=True)
    _add_catalog_argument(stats_parser)

    flavors_parser = subparsers.add_parser("flavors", help="List available binding flavors.")
    _add_verbose_option(flavors_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for annogen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.quiet, log_file=args.log_file)

    if args.command == "flavors":
        for flavor in available_flavors():
            print(flavor)
        return

    if args.command == "dump" and args.chunk_size is not None and args.chunk_size <= 0:
        parser.exit(1, "--chunk-size must be a positive number of bytes\n")

    try:
        config = load_config(args.config or Path(args.catalog).expanduser().resolve().parent)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    orchestrator = Orchestrator(config)

    if args.command == "dump":
        try:
            summary = orchestrator.run(
                args.catalog,
                args.output,
                flavor=args.flavor,
                chunk_size=args.chunk_size,
                merge_generics=False if args.no_merge else None,
            )
        except (FileNotFoundError, CatalogError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        except DumpError as exc:
            if exc.summary is not None:
                for line in exc.summary.lines():
                    print(line)
            parser.exit(1, f"annogen dump failed: {exc}\nRun with --verbose for more details.\n")
        for line in summary.lines():
            print(line)
        print(f"Output written to {_relativize(summary.output_dir)}")
    elif args.command == "stats":
        try:
            catalog = load_catalog(args.catalog)
        except (FileNotFoundError, CatalogError) as exc:
            parser.exit(1, f"{exc}\n")
        prepared = orchestrator.prepare(
            catalog,
            merge_generics=config.merge_generics and not args.no_merge,
            exported=config.exported,
        )
        print(f"Symbols: {prepared.symbol_count}")
        print(f"Exported: {prepared.exported_count}")
        print(f"Type definitions: {len(prepared.types)}")
        print(f"Merged generic instances: {prepared.merged_count}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path | None) -> str:
    if path is None:
        return "."
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
