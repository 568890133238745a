from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading
and merging (defaults, config file, command-line overrides), the combine
run, and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from filecombiner.core.pipeline.engine import run_pipeline
from filecombiner.core.pipeline.stages.validator import is_known_charset, validate_config
from filecombiner.domain.config import load_config
from filecombiner.domain.pipeline_models import CombineResult
from filecombiner.infra.logging import LoggingConfig, configure_logging, get_logger
from filecombiner.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

_USAGE_ERROR_KINDS = ("NoInputFiles", "InvalidConfig")

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 combine failure, 2 usage error).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap (console on stderr; stdout may carry the output)
    configure_logging(LoggingConfig.for_cli(debug=args.debug, verbose=args.verbose, log_file=args.log_file))

    # 2. Configuration hierarchy
    base_conf = load_config(args.config_file)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    charset = raw_conf.get("charset")
    if isinstance(charset, str) and charset.strip() and not is_known_charset(charset):
        print(f"ERROR: Unknown charset '{charset}'.", file=sys.stderr)
        return EXIT_USAGE

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if not clean_conf["inputs"]:
        parser.print_usage(sys.stderr)
        print("ERROR: no input files given.", file=sys.stderr)
        return EXIT_USAGE

    if args.json_output and not (clean_conf["output_path"] or clean_conf["dry_run"]):
        print("ERROR: --json requires --output or --dry-run.", file=sys.stderr)
        return EXIT_USAGE

    # 3. Combine run
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED

    # 4. Rendering
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    elif not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
    elif result.dry_run:
        _print_order(result)
    elif result.output_path:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    return EXIT_USAGE if result.error_kind in _USAGE_ERROR_KINDS else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge known, non-None override keys into the base config."""
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_order(result: CombineResult) -> None:
    for path in result.ordered_files:
        print(path)


def _print_human_summary(result: CombineResult) -> None:
    summary = result.summary
    print(f"Combined {summary.get('files_written', 0)} file(s) into {result.output_path}")
    if result.skipped_entries:
        print(f"Skipped entries: {', '.join(result.skipped_entries)}")


if __name__ == "__main__":
    sys.exit(main())
