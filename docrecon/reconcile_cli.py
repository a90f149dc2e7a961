"""Command-line entry point: load record files, merge, report and export."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from docrecon.errors import AggregateLoadError, SourceLoadError
from docrecon.export import dump_collection
from docrecon.load_config import load_config, visibility_flags
from docrecon.load_record_file import load_record_file
from docrecon.load_sources import LoadResult, load_sources
from docrecon.records import Source

logger = logging.getLogger(__name__)


def run_reconcile(args: argparse.Namespace) -> int:
    """Execute the reconcile pipeline for parsed command-line arguments."""
    config = load_config(args.config)
    _configure_logging(config, verbose=args.verbose)

    files: list[Path] = sorted(args.files)
    if not files:
        msg = "No record files given"
        raise SystemExit(msg)
    missing = [f for f in files if not f.exists()]
    if missing:
        msg = "Record file(s) not found: " + ", ".join(str(f) for f in missing)
        raise SystemExit(msg)

    sources, failures = _read_sources(files, config)
    result = load_sources(
        sources,
        fail_fast=bool(config.get("fail_fast")),
        include=visibility_flags(config),
        skip_compiler_generated=bool(config.get("skip_compiler_generated", True)),
        compiler_generated_prefixes=config.get("compiler_generated_prefixes") or (),
    )
    failures.extend(result.failures)

    _print_summary(result)
    if args.out and not args.dry_run:
        dump_collection(result.collection, args.out)
        print(f"Wrote {len(result.collection)} types into: {args.out}")

    if failures:
        raise AggregateLoadError(failures)
    return 0


def _configure_logging(config: dict[str, Any], *, verbose: bool) -> None:
    level = "DEBUG" if verbose else str(config.get("log_level", "INFO")).upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _read_sources(
    files: list[Path], config: dict[str, Any]
) -> tuple[list[Source], list[SourceLoadError]]:
    """Read every record file; unreadable files become failures."""
    sources: list[Source] = []
    failures: list[SourceLoadError] = []
    for path in files:
        try:
            sources.append(load_record_file(path))
        except SourceLoadError as e:
            logger.error("Failed to read %s: %s", path, e)
            if config.get("fail_fast"):
                raise
            failures.append(e)
    return sources, failures


def _print_summary(result: LoadResult) -> None:
    collection = result.collection
    members = sum(t.member_count for t in collection)
    print(f"Reconciled {len(collection)} types with {members} members")
    for failure in result.failures:
        print(f"  FAILED {failure}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the reconcile command."""
    ap = argparse.ArgumentParser(
        description=(
            "Reconcile structural and documentation records of .NET code into "
            "one canonical model."
        ),
    )
    ap.add_argument(
        "files",
        type=Path,
        nargs="*",
        help="YAML record files, one source each",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--out",
        type=Path,
        help="Write the merged model here (.json for JSON, otherwise YAML)",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Load and merge without writing any output",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = ap.parse_args(argv)
    try:
        return run_reconcile(args)
    except AggregateLoadError as e:
        print(e)
        return 1
    except SourceLoadError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
