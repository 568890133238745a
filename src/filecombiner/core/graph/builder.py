from __future__ import annotations

"""
Dependency Graph Builder.

Turns the closed set of parsed SourceFile records into a directed graph
(file -> dependency) and rejects graphs that contain a cycle. A file that
requires itself gets no self edge; indirect cycles (A requires B requires A)
are caught here.
"""

import graphlib
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from filecombiner.domain.errors import CycleDetectedError
from filecombiner.domain.source_models import SourceFile

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """
    Adjacency view over the run's files, keyed by canonical path.

    Attributes:
        edges: Path -> dependency paths, in declaration order, no duplicates.
        rank: Path -> discovery position, used for deterministic tie-breaks.
        files: Path -> record, for mapping the order back to contents.
    """
    edges: Dict[str, List[str]] = field(default_factory=dict)
    rank: Dict[str, int] = field(default_factory=dict)
    files: Dict[str, SourceFile] = field(default_factory=dict)

    def dependents(self) -> Dict[str, Set[str]]:
        """Reverse adjacency: path -> paths that require it."""
        reverse: Dict[str, Set[str]] = {path: set() for path in self.edges}
        for path, deps in self.edges.items():
            for dep in deps:
                reverse.setdefault(dep, set()).add(path)
        return reverse

    def edge_count(self) -> int:
        return sum(len(deps) for deps in self.edges.values())


def build_dependency_graph(files: Iterable[SourceFile]) -> DependencyGraph:
    """
    Build the graph and check it for cycles.

    Args:
        files: Parsed records in discovery order.

    Returns:
        DependencyGraph: One node per file, one edge per distinct dependency.

    Raises:
        CycleDetectedError: If any chain of requires returns to its start.
    """
    graph = DependencyGraph()
    for source in files:
        graph.rank[source.path] = len(graph.rank)
        graph.files[source.path] = source
        deps = [dep.path for dep in source.dependencies if dep is not source]
        graph.edges[source.path] = list(dict.fromkeys(deps))

    ensure_acyclic(graph)
    logger.debug(f"Dependency graph: {len(graph.edges)} node(s), {graph.edge_count()} edge(s)")
    return graph


def ensure_acyclic(graph: DependencyGraph) -> None:
    """Raise CycleDetectedError if the graph has a cycle."""
    try:
        graphlib.TopologicalSorter(graph.edges).prepare()
    except graphlib.CycleError as e:
        raise cycle_error_from(e) from e


def cycle_error_from(error: graphlib.CycleError) -> CycleDetectedError:
    """
    Convert a graphlib cycle report into a CycleDetectedError.

    graphlib walks the cycle from dependency to dependent; the members are
    reversed so the message reads in "requires" direction.
    """
    members = list(error.args[1]) if len(error.args) > 1 else []
    return CycleDetectedError(list(reversed(members)))
