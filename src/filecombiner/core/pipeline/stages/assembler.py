from __future__ import annotations

"""
Output Assembler Stage.

Writes the ordered files to the output sink, optionally preceding each one
with a separator line that names it. Contents are written unchanged.
"""

import logging
from typing import Iterable, TextIO

from filecombiner.domain.errors import CombineIOError
from filecombiner.domain.source_models import SourceFile

logger = logging.getLogger(__name__)


def format_separator(name: str) -> str:
    """Build the marker line emitted ahead of a file's contents."""
    return f"\n/*------{name}------*/\n"


def write_combined(
        out: TextIO,
        files: Iterable[SourceFile],
        separator: bool = False,
        verbose: bool = False,
) -> int:
    """
    Emit each file's cleaned contents, in order, to the sink.

    Anything already written stays written if a later write fails.

    Args:
        out: Writable text sink.
        files: Parsed records in emission order.
        separator: Precede each file with a marker naming it.
        verbose: Log each added file at INFO instead of DEBUG.

    Returns:
        int: Number of files written.

    Raises:
        CombineIOError: If the sink rejects a write.
    """
    level = logging.INFO if verbose else logging.DEBUG
    count = 0

    for source in files:
        logger.log(level, f"Adding '{source.name}' to output.")
        try:
            if separator:
                out.write(format_separator(source.name))
            out.write(source.contents or "")
        except OSError as e:
            raise CombineIOError(f"Failed writing '{source.name}' to output: {e}", path=source.path) from e
        count += 1

    return count
