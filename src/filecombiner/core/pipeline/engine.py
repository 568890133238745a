from __future__ import annotations

"""
Core combine pipeline.

This module coordinates a combine run:
1. Filters the caller's entry paths down to regular files.
2. Discovers the transitive closure of requires directives.
3. Builds the dependency graph and rejects cycles.
4. Orders the files so dependencies come first.
5. Writes the cleaned contents to the output sink.

All discovery and ordering happens before the first byte is written, so a
fatal discovery or graph error never leaves partial output behind.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO, Tuple

from filecombiner.core.graph.builder import DependencyGraph, build_dependency_graph
from filecombiner.core.graph.orderer import order_sources
from filecombiner.core.pipeline.components.reader import read_source_text
from filecombiner.core.pipeline.stages.assembler import write_combined
from filecombiner.core.pipeline.stages.validator import is_known_charset, validate_config
from filecombiner.core.services.discovery import Reader, discover_sources
from filecombiner.core.services.registry import SourceRegistry
from filecombiner.domain.config import DEFAULT_CHARSET
from filecombiner.domain.errors import CombineIOError, CombinerError
from filecombiner.domain.pipeline_models import (
    CombineResult,
    create_error_result,
    create_success_result,
)
from filecombiner.domain.source_models import SourceFile
from filecombiner.infra.fs import canonical_path, is_regular_file, normalize_path, open_output_sink

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def discover_graph(
        files: Sequence[str],
        charset: str = DEFAULT_CHARSET,
        verbose: bool = False,
        reader: Reader = read_source_text,
) -> DependencyGraph:
    """
    Discover every file reachable from the entries and build their graph.

    A fresh registry is built for every call; nothing is cached between runs.

    Args:
        files: Entry file paths (regular files).
        charset: Codec used to decode every file.
        verbose: Log the processing trail at INFO.
        reader: "path, charset -> text" primitive.

    Returns:
        DependencyGraph: Acyclic graph over all discovered files.

    Raises:
        CombinerError: On any fatal discovery, graph or read failure.
    """
    registry = SourceRegistry()
    discover_sources(files, registry, charset, verbose=verbose, reader=reader)
    return build_dependency_graph(registry)


def resolve_order(
        files: Sequence[str],
        charset: str = DEFAULT_CHARSET,
        verbose: bool = False,
        eliminate_unused: bool = False,
        reader: Reader = read_source_text,
) -> List[SourceFile]:
    """
    Discover, graph and order the files reachable from the entries.

    Args:
        files: Entry file paths (regular files).
        charset: Codec used to decode every file.
        verbose: Log the processing trail at INFO.
        eliminate_unused: Drop files with no dependencies and no dependents.
        reader: "path, charset -> text" primitive.

    Returns:
        List[SourceFile]: Parsed records in emission order.

    Raises:
        CombinerError: On any fatal discovery, graph or read failure.
    """
    graph = discover_graph(files, charset, verbose=verbose, reader=reader)
    return order_sources(graph, eliminate=eliminate_unused)


def combine(
        out: TextIO,
        files: Sequence[str],
        charset: str = DEFAULT_CHARSET,
        verbose: bool = False,
        separator: bool = False,
        eliminate_unused: bool = False,
) -> List[SourceFile]:
    """
    Combine the entry files and their dependencies onto out.

    Args:
        out: Where to place the output.
        files: The entry files to combine.
        charset: The character set used to read the files.
        verbose: Log warnings and additional information at INFO.
        separator: Emit a marker line naming each file before its contents.
        eliminate_unused: Drop files with no dependencies upon which nothing depends.

    Returns:
        List[SourceFile]: The files in the order they were written.

    Raises:
        CombinerError: On any fatal condition; nothing is written unless the
                       ordering succeeded.
    """
    ordered = resolve_order(files, charset, verbose=verbose, eliminate_unused=eliminate_unused)
    write_combined(out, ordered, separator=separator, verbose=verbose)
    return ordered


def combine_paths(
        out: TextIO,
        filenames: Iterable[str],
        charset: str = DEFAULT_CHARSET,
        verbose: bool = False,
        separator: bool = False,
        eliminate_unused: bool = False,
) -> List[SourceFile]:
    """
    Combine from path strings, skipping entries that are not regular files.

    Args:
        out: Where to place the output.
        filenames: Entry path strings.
        charset: The character set used to read the files.
        verbose: Log warnings and additional information at INFO.
        separator: Emit a marker line naming each file before its contents.
        eliminate_unused: Drop files with no dependencies upon which nothing depends.

    Returns:
        List[SourceFile]: The files in the order they were written.
    """
    entries, _ = filter_entry_paths(filenames, verbose=verbose)
    return combine(out, entries, charset, verbose, separator, eliminate_unused)


def filter_entry_paths(filenames: Iterable[str], verbose: bool = False) -> Tuple[List[str], List[str]]:
    """
    Split entry path strings into usable files and skipped ones.

    Returns:
        Tuple[List[str], List[str]]: (canonical entry paths, skipped raw paths).
    """
    level = logging.INFO if verbose else logging.DEBUG
    entries: List[str] = []
    skipped: List[str] = []

    for name in filenames:
        path = normalize_path(name)
        if path and is_regular_file(path):
            entries.append(canonical_path(path))
            logger.log(level, f"Adding file '{path}'")
        else:
            skipped.append(name)
            logger.warning(f"Couldn't find file '{name}'")

    return entries, skipped


def run_pipeline(config: Optional[Dict[str, Any]]) -> CombineResult:
    """
    Execute a full combine run from a configuration mapping.

    Fatal combine errors are returned as an error result rather than raised.
    An unknown charset is rejected up front with error kind "InvalidConfig".

    Args:
        config: Raw or partial configuration dictionary.

    Returns:
        CombineResult: Outcome of the run.
    """
    raw = config or {}
    cfg, warnings = validate_config(raw, strict=False)

    raw_charset = raw.get("charset") if isinstance(raw, dict) else None
    if isinstance(raw_charset, str) and raw_charset.strip() and not is_known_charset(raw_charset):
        logger.error(f"Unknown charset '{raw_charset}'.")
        return create_error_result(f"Unknown charset '{raw_charset}'.", cfg, error_kind="InvalidConfig")

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    entries, skipped = filter_entry_paths(cfg["inputs"], verbose=cfg["verbose"])
    if not entries:
        return create_error_result(
            "No valid input files to combine.", cfg,
            error_kind="NoInputFiles", skipped_entries=skipped,
        )

    output_path = normalize_path(cfg["output_path"])

    try:
        graph = discover_graph(entries, cfg["charset"], verbose=cfg["verbose"])

        # Every discovered file counts, including ones eliminate_unused drops.
        if output_path and canonical_path(output_path) in graph.files:
            raise CombineIOError(f"Output file '{output_path}' is also an input.", path=output_path)

        ordered = order_sources(graph, eliminate=cfg["eliminate_unused"])

        if cfg["dry_run"]:
            logger.info("Dry run enabled: Skipping output.")
        else:
            try:
                with open_output_sink(output_path, cfg["charset"]) as out:
                    write_combined(out, ordered, separator=cfg["separator"], verbose=cfg["verbose"])
            except OSError as e:
                raise CombineIOError(f"Cannot write output '{output_path}': {e}", path=output_path) from e

    except CombinerError as e:
        logger.error(str(e))
        return create_error_result(
            str(e), cfg, error_kind=type(e).__name__,
            entries=entries, skipped_entries=skipped,
        )

    summary = {
        "entries": len(entries),
        "skipped": len(skipped),
        "files_written": 0 if cfg["dry_run"] else len(ordered),
        "files_ordered": len(ordered),
        "dependencies": sum(len(s.dependencies) for s in ordered),
        "bytes": sum(len((s.contents or "").encode(cfg["charset"], errors="replace")) for s in ordered),
    }
    logger.info("Combine finished successfully.")
    return create_success_result(cfg, entries, skipped, [s.path for s in ordered], summary)
