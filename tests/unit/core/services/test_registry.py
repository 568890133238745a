from __future__ import annotations

"""
Unit tests for the Source Registry.

Verifies canonical identity (one record per physical file) and that
insertion order is kept as discovery order.
"""

import os
from pathlib import Path

import pytest

from filecombiner.core.services.registry import SourceRegistry


def test_get_creates_unparsed_record(tmp_path: Path) -> None:
    registry = SourceRegistry()
    source = registry.get(str(tmp_path / "a.js"))

    assert source.path == os.path.realpath(str(tmp_path / "a.js"))
    assert source.contents is None
    assert source.dependencies == []
    assert len(registry) == 1


def test_different_spellings_share_one_record(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "lib").mkdir()
    monkeypatch.chdir(tmp_path)
    registry = SourceRegistry()

    first = registry.get("lib/x.js")
    second = registry.get(str(tmp_path / "lib" / ".." / "lib" / "." / "x.js"))

    assert first is second
    assert len(registry) == 1


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="symlinks unavailable")
def test_symlink_resolves_to_target_record(tmp_path: Path) -> None:
    target = tmp_path / "real.js"
    target.write_text("x", encoding="utf-8")
    link = tmp_path / "alias.js"
    link.symlink_to(target)
    registry = SourceRegistry()

    assert registry.get(str(link)) is registry.get(str(target))


def test_iteration_follows_first_reference_order(tmp_path: Path) -> None:
    registry = SourceRegistry()
    for name in ["c.js", "a.js", "b.js", "a.js"]:
        registry.get(str(tmp_path / name))

    assert [s.name for s in registry] == ["c.js", "a.js", "b.js"]
    assert len(registry) == 3


def test_contains_uses_canonical_path(tmp_path: Path) -> None:
    registry = SourceRegistry()
    registry.get(str(tmp_path / "a.js"))

    assert str(tmp_path / "." / "a.js") in registry
    assert str(tmp_path / "b.js") not in registry
