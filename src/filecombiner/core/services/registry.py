from __future__ import annotations

"""
Source Registry.

Run-scoped cache mapping canonical absolute paths to SourceFile records.
The registry owns every record; dependency lists only reference them.
"""

import logging
from typing import Dict, Iterator

from filecombiner.domain.source_models import SourceFile
from filecombiner.infra.fs import canonical_path

logger = logging.getLogger(__name__)


class SourceRegistry:
    """
    One record per physical file, in first-reference order.

    Insertion order doubles as discovery order, which the orderer uses to
    break ties between files with no mutual constraint.
    """

    def __init__(self) -> None:
        self._files: Dict[str, SourceFile] = {}

    def get(self, path: str) -> SourceFile:
        """
        Return the record for path, creating an unparsed one if needed.

        Args:
            path: Any spelling of the file's path.

        Returns:
            SourceFile: The unique record for the canonical path.
        """
        key = canonical_path(path)
        source = self._files.get(key)
        if source is None:
            source = SourceFile(path=key)
            self._files[key] = source
            logger.debug(f"Registered source file '{key}'")
        return source

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and canonical_path(path) in self._files

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)
