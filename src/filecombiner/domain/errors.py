from __future__ import annotations

"""
Combiner Error Hierarchy.

Every fatal condition raised by the discovery, graph and output stages
derives from CombinerError, so callers can trap the whole family in one
clause while still inspecting the specific failure kind.
"""

from typing import List, Optional


class CombinerError(Exception):
    """
    Base class for fatal combine failures.

    Attributes:
        path: Offending file path, when the failure is tied to one.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class MissingDependencyError(CombinerError):
    """A declared dependency does not resolve to a regular file."""

    def __init__(self, dependency: str, declared_in: str) -> None:
        super().__init__(
            f"Dependency file not found: '{dependency}' (required by '{declared_in}')",
            path=dependency,
        )
        self.declared_in = declared_in


class MalformedDirectiveError(CombinerError):
    """A requires directive is not terminated by '*/'."""

    def __init__(self, path: str, directive: str) -> None:
        super().__init__(
            f"Invalid requires comment in '{path}': unterminated directive '{directive.strip()}'",
            path=path,
        )
        self.directive = directive


class CycleDetectedError(CombinerError):
    """
    The dependency graph contains a cycle.

    Attributes:
        cycle: Member paths in dependency order, first path repeated at the end.
    """

    def __init__(self, cycle: List[str]) -> None:
        chain = " -> ".join(cycle)
        super().__init__(f"Circular dependency detected: {chain}", path=cycle[0] if cycle else None)
        self.cycle = list(cycle)


class CombineIOError(CombinerError):
    """Reading a source file or writing to the output sink failed."""
