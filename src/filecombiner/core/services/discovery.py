from __future__ import annotations

"""
Discovery Worklist.

Breadth-first driver that computes the transitive closure of the entry
files. The queue grows while it is being consumed; each physical file is
parsed at most once, which is also what keeps cyclic requires chains from
looping forever.
"""

import logging
from collections import deque
from typing import Callable, Deque, Iterable, List

from filecombiner.core.parsing.directives import parse_source_file
from filecombiner.core.pipeline.components.reader import read_source_text
from filecombiner.core.services.registry import SourceRegistry
from filecombiner.domain.source_models import SourceFile

logger = logging.getLogger(__name__)

Reader = Callable[[str, str], str]


def discover_sources(
        entry_paths: Iterable[str],
        registry: SourceRegistry,
        charset: str,
        verbose: bool = False,
        reader: Reader = read_source_text,
) -> List[SourceFile]:
    """
    Parse every file reachable from the entry files.

    Args:
        entry_paths: Entry files, already known to be regular files.
        registry: Fresh registry for this run.
        charset: Codec used to decode every file.
        verbose: Log progress at INFO instead of DEBUG.
        reader: "path, charset -> text" primitive.

    Returns:
        List[SourceFile]: The entry records, in the order given.

    Raises:
        CombinerError: Any fatal parse, resolution or read failure.
    """
    level = logging.INFO if verbose else logging.DEBUG
    entries: List[SourceFile] = []
    todo: Deque[SourceFile] = deque()

    for path in entry_paths:
        source = registry.get(path)
        if source not in entries:
            entries.append(source)
        todo.append(source)

    while todo:
        source = todo.popleft()
        if source.is_parsed:
            continue

        logger.log(level, f"Processing file '{source.path}'")
        text = reader(source.path, charset)
        todo.extend(parse_source_file(source, text, registry, verbose=verbose))

    logger.debug(f"Discovery closed over {len(registry)} file(s)")
    return entries
