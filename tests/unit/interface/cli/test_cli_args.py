from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Mapping of CLI flags to configuration keys.
2. Only explicitly given options become overrides.
"""

import pytest

from filecombiner.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_cli_flags_mapping():
    args = parse_args([
        "main.js", "extra.js",
        "-o", "out.js",
        "--charset", "latin-1",
        "--separator",
        "--eliminate-unused",
        "--dry-run",
        "-v",
    ])

    overrides = args_to_overrides(args)

    assert overrides == {
        "inputs": ["main.js", "extra.js"],
        "output_path": "out.js",
        "charset": "latin-1",
        "separator": True,
        "eliminate_unused": True,
        "dry_run": True,
        "verbose": True,
    }


def test_cli_defaults_produce_no_overrides():
    args = parse_args([])

    assert args_to_overrides(args) == {}
    assert args.json_output is False
    assert args.debug is False
    assert args.config_file is None


def test_cli_config_and_json_flags():
    args = parse_args(["--config", "c.json", "--json", "--debug", "a.js"])

    assert args.config_file == "c.json"
    assert args.json_output is True
    assert args.debug is True


def test_cli_version_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--version"])

    assert exc.value.code == 0
    assert "filecombiner" in capsys.readouterr().out


def test_cli_log_file_is_not_a_config_override():
    args = parse_args(["--log-file", "run.log", "a.js"])

    assert args.log_file == "run.log"
    assert "log_file" not in args_to_overrides(args)
