from __future__ import annotations

"""
Topological Orderer.

Produces the emission order: every file follows all of its dependencies.
Among files that are ready at the same time, the one discovered first is
emitted first, so identical inputs always give identical output.
"""

import graphlib
import heapq
import logging
from typing import List, Tuple

from filecombiner.core.graph.builder import DependencyGraph, cycle_error_from
from filecombiner.domain.source_models import SourceFile

logger = logging.getLogger(__name__)


def topological_order(graph: DependencyGraph) -> List[str]:
    """
    Linearize an acyclic dependency graph.

    Args:
        graph: Graph produced by build_dependency_graph.

    Returns:
        List[str]: Canonical paths, dependencies before dependents.

    Raises:
        CycleDetectedError: If the graph has a cycle.
    """
    sorter = graphlib.TopologicalSorter(graph.edges)
    try:
        sorter.prepare()
    except graphlib.CycleError as e:
        raise cycle_error_from(e) from e

    ready: List[Tuple[int, str]] = []
    order: List[str] = []

    while sorter.is_active():
        for path in sorter.get_ready():
            heapq.heappush(ready, (graph.rank[path], path))
        _, path = heapq.heappop(ready)
        order.append(path)
        sorter.done(path)

    return order


def eliminate_unused(order: List[str], graph: DependencyGraph) -> List[str]:
    """
    Drop files that declare no dependencies and are required by nothing.

    A self-requiring file counts as declaring a dependency and is kept.

    Args:
        order: Emission order from topological_order.
        graph: The graph the order was computed from.

    Returns:
        List[str]: The order without the unused files.
    """
    dependents = graph.dependents()
    kept: List[str] = []
    for path in order:
        source = graph.files.get(path)
        declared = source.dependencies if source is not None else graph.edges.get(path)
        if declared or dependents.get(path):
            kept.append(path)
        else:
            logger.info(f"Eliminating unused file '{path}'")
    return kept


def order_sources(graph: DependencyGraph, eliminate: bool = False) -> List[SourceFile]:
    """Topologically order the graph and map the paths back to records."""
    order = topological_order(graph)
    if eliminate:
        order = eliminate_unused(order, graph)
    return [graph.files[path] for path in order]
