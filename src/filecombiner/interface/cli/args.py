from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the domain layer.
"""

import argparse
from typing import Any, Dict

from filecombiner import __version__

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the filecombiner CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="filecombiner",
        description="Combine source files in dependency order using /*requires */ directives.",
    )

    # --- Inputs and Output ---
    p.add_argument(
        "inputs",
        nargs="*",
        metavar="FILE",
        help="Entry files. Their requires directives pull in the rest.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the combined result to this file instead of stdout.",
    )
    p.add_argument(
        "--charset",
        default=None,
        help="Character set of the input files (default: utf-8).",
    )

    # --- Output Format ---
    p.add_argument(
        "--separator",
        action="store_true",
        help="Precede each file with a /*------name------*/ marker line.",
    )
    p.add_argument(
        "--eliminate-unused",
        action="store_true",
        help="Drop files that have no dependencies and that nothing depends on.",
    )

    # --- Runtime ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file (default: ./.filecombiner.json if present).",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and print the file order without writing output.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON (requires --output or --dry-run).",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report processed files and dependencies on stderr.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write the full DEBUG trail to this rotating log file.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only values given on the command line appear in the result, so they
    layer cleanly over a configuration file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.inputs:
        overrides["inputs"] = list(args.inputs)
    if args.output_path:
        overrides["output_path"] = args.output_path
    if args.charset:
        overrides["charset"] = args.charset

    if args.separator:
        overrides["separator"] = True
    if args.eliminate_unused:
        overrides["eliminate_unused"] = True
    if args.dry_run:
        overrides["dry_run"] = True
    if args.verbose:
        overrides["verbose"] = True

    return overrides
