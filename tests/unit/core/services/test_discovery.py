from __future__ import annotations

"""
Unit tests for the Discovery Worklist.

Verifies:
1. Transitive closure from the entry files.
2. Each physical file is read and parsed exactly once.
3. Cyclic requires chains terminate.
4. Fatal errors propagate out of the loop.
"""

from collections import Counter
from pathlib import Path

import pytest

from filecombiner.core.pipeline.components.reader import read_source_text
from filecombiner.core.services.discovery import discover_sources
from filecombiner.core.services.registry import SourceRegistry
from filecombiner.domain.errors import CombineIOError, MissingDependencyError


def _counting_reader(counter: Counter):
    def _read(path: str, charset: str) -> str:
        counter[path] += 1
        return read_source_text(path, charset)
    return _read


def test_discovers_transitive_closure(make_tree) -> None:
    root = make_tree({
        "main.js": "/*requires a.js */M",
        "a.js": "/*requires lib/b.js */A",
        "lib/b.js": "/*requires ../c.js */B",
        "c.js": "C",
        "unrelated.js": "U",
    })
    registry = SourceRegistry()

    entries = discover_sources([str(root / "main.js")], registry, "utf-8")

    assert [e.name for e in entries] == ["main.js"]
    assert [s.name for s in registry] == ["main.js", "a.js", "b.js", "c.js"]
    assert all(s.is_parsed for s in registry)


def test_shared_dependency_is_parsed_once(make_tree) -> None:
    root = make_tree({
        "a.js": "/*requires shared.js */A",
        "b.js": "/*requires shared.js */B",
        "c.js": "/*requires ./shared.js *//*requires b.js */C",
        "shared.js": "S",
    })
    counter: Counter = Counter()
    registry = SourceRegistry()

    discover_sources(
        [str(root / n) for n in ("a.js", "b.js", "c.js")],
        registry, "utf-8", reader=_counting_reader(counter),
    )

    assert len(registry) == 4
    assert set(counter.values()) == {1}
    shared = registry.get(str(root / "shared.js"))
    for name in ("a.js", "b.js", "c.js"):
        assert shared in registry.get(str(root / name)).dependencies


def test_cycle_terminates_and_keeps_edges(make_tree) -> None:
    root = make_tree({
        "a.js": "/*requires b.js */A",
        "b.js": "/*requires a.js */B",
    })
    counter: Counter = Counter()
    registry = SourceRegistry()

    discover_sources([str(root / "a.js")], registry, "utf-8", reader=_counting_reader(counter))

    a = registry.get(str(root / "a.js"))
    b = registry.get(str(root / "b.js"))
    assert a.dependencies == [b]
    assert b.dependencies == [a]
    assert sum(counter.values()) == 2


def test_duplicate_entries_are_collapsed(make_tree) -> None:
    root = make_tree({"a.js": "A"})
    registry = SourceRegistry()

    entries = discover_sources(
        [str(root / "a.js"), str(root / "." / "a.js")], registry, "utf-8"
    )

    assert len(entries) == 1
    assert len(registry) == 1


def test_missing_dependency_aborts_discovery(make_tree) -> None:
    root = make_tree({"a.js": "/*requires ghost.js */"})

    with pytest.raises(MissingDependencyError):
        discover_sources([str(root / "a.js")], SourceRegistry(), "utf-8")


def test_read_failure_aborts_discovery(make_tree) -> None:
    root = make_tree({"a.js": "A"})

    def _broken(path: str, charset: str) -> str:
        raise CombineIOError(f"Cannot read '{path}'", path=path)

    with pytest.raises(CombineIOError):
        discover_sources([str(root / "a.js")], SourceRegistry(), "utf-8", reader=_broken)


def test_verbose_logs_processing_trail(make_tree, caplog: pytest.LogCaptureFixture) -> None:
    root = make_tree({"main.js": "/*requires util.js */", "util.js": ""})

    with caplog.at_level("INFO"):
        discover_sources([str(root / "main.js")], SourceRegistry(), "utf-8", verbose=True)

    messages = [r.getMessage() for r in caplog.records]
    assert any("Processing file" in m and "main.js" in m for m in messages)
    assert "... has dependency on util.js" in messages
    assert "... no dependencies found." in messages
