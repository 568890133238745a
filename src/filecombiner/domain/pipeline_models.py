from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structure handed from the combine engine to the
interface layer, plus factory functions for the success and error cases.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CombineResult:
    """
    Unified result object of a complete combine run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: Class name of the fatal error, empty on success.
        output_path: Destination file, empty when writing to stdout.
        charset: Charset used to decode the sources.
        separator: Whether separator markers were emitted.
        eliminate_unused: Whether unused files were dropped.
        dry_run: True if the order was computed without writing.
        entries: Entry files accepted into the run.
        skipped_entries: Entry paths that did not name a regular file.
        ordered_files: Emission order (canonical paths).
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str

    output_path: str
    charset: str
    separator: bool
    eliminate_unused: bool
    dry_run: bool

    error_kind: str = ""
    entries: List[str] = field(default_factory=list)
    skipped_entries: List[str] = field(default_factory=list)
    ordered_files: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        error_kind: str = "",
        entries: Optional[List[str]] = None,
        skipped_entries: Optional[List[str]] = None,
) -> CombineResult:
    """
    Create a failed combine result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        error_kind: Name of the error class that aborted the run.
        entries: Entry files accepted before the failure.
        skipped_entries: Entry paths skipped as missing.

    Returns:
        CombineResult: An immutable error result object.
    """
    return CombineResult(
        ok=False,
        error=error,
        error_kind=error_kind,
        output_path=cfg.get("output_path", "") or "",
        charset=cfg.get("charset", ""),
        separator=bool(cfg.get("separator", False)),
        eliminate_unused=bool(cfg.get("eliminate_unused", False)),
        dry_run=bool(cfg.get("dry_run", False)),
        entries=entries or [],
        skipped_entries=skipped_entries or [],
    )


def create_success_result(
        cfg: Dict[str, Any],
        entries: List[str],
        skipped_entries: List[str],
        ordered_files: List[str],
        summary_extra: Optional[Dict[str, Any]] = None,
) -> CombineResult:
    """
    Create a successful combine result instance.

    Args:
        cfg: Final configuration used during execution.
        entries: Entry files accepted into the run.
        skipped_entries: Entry paths skipped as missing.
        ordered_files: Canonical paths in emission order.
        summary_extra: Final execution metrics.

    Returns:
        CombineResult: An immutable success result object.
    """
    return CombineResult(
        ok=True,
        error="",
        output_path=cfg.get("output_path", "") or "",
        charset=cfg.get("charset", ""),
        separator=bool(cfg.get("separator", False)),
        eliminate_unused=bool(cfg.get("eliminate_unused", False)),
        dry_run=bool(cfg.get("dry_run", False)),
        entries=entries,
        skipped_entries=skipped_entries,
        ordered_files=ordered_files,
        summary=summary_extra or {},
    )
