from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes,
stream routing (combined text on stdout, diagnostics on stderr) and file
system side effects.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "filecombiner" / "main.py"


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding 'python' and script path).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_project(make_tree) -> Path:
    """
    Structure:
    /app.js       requires lib/dom.js, lib/util.js
    /lib/dom.js   requires util.js
    /lib/util.js
    /broken.js    requires missing.js
    """
    return make_tree({
        "app.js": "/*requires lib/dom.js */\n/*requires lib/util.js */\napp();\n",
        "lib/dom.js": "/*requires util.js */dom();\n",
        "lib/util.js": "util();\n",
        "broken.js": "/*requires missing.js */",
    })


def test_cli_happy_path_to_file(tmp_path: Path, sample_project: Path) -> None:
    out_file = tmp_path / "dist" / "bundle.js"

    result = run_cli([str(sample_project / "app.js"), "-o", str(out_file)])

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert out_file.read_text(encoding="utf-8") == "util();\ndom();\n\n\napp();\n"


def test_cli_stdout_with_separator(sample_project: Path) -> None:
    result = run_cli(["app.js", "--separator"], cwd=sample_project)

    assert result.returncode == 0, result.stderr
    assert result.stdout.index("/*------util.js------*/") < result.stdout.index("/*------dom.js------*/")
    assert result.stdout.index("/*------dom.js------*/") < result.stdout.index("/*------app.js------*/")


def test_cli_verbose_goes_to_stderr(sample_project: Path) -> None:
    result = run_cli(["app.js", "-v"], cwd=sample_project)

    assert result.returncode == 0
    assert "Processing file" in result.stderr
    assert "has dependency on lib/dom.js" in result.stderr
    assert "Processing file" not in result.stdout


def test_cli_missing_dependency(sample_project: Path) -> None:
    result = run_cli(["broken.js"], cwd=sample_project)

    assert result.returncode == 1
    assert result.stdout == ""
    assert "Dependency file not found" in result.stderr
    assert "missing.js" in result.stderr


def test_cli_missing_entry_is_skipped(sample_project: Path) -> None:
    result = run_cli(["nope.js", "lib/util.js"], cwd=sample_project)

    assert result.returncode == 0
    assert result.stdout == "util();\n"
    assert "Couldn't find file 'nope.js'" in result.stderr


def test_cli_dry_run_lists_order(sample_project: Path) -> None:
    result = run_cli(["app.js", "--dry-run"], cwd=sample_project)

    assert result.returncode == 0
    names = [Path(line).name for line in result.stdout.splitlines()]
    assert names == ["util.js", "dom.js", "app.js"]
