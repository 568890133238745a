from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Canonical path identity, regular-file checks and output sink handling.
Every path that enters the registry passes through canonical_path so two
spellings of the same file map to one record.
"""

import contextlib
import io
import os
import sys
from typing import Iterator, Optional, TextIO

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a user-supplied path string into an absolute path.

    Expands environment variables and '~'. Falls back when the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path, or '' if both inputs are empty.
    """
    p = (path or "").strip() or fallback
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def canonical_path(path: str) -> str:
    """
    Resolve '.', '..' and symlinks into the absolute identity of a file.

    Args:
        path: Relative or absolute path.

    Returns:
        str: Canonical absolute path.
    """
    return os.path.realpath(os.path.abspath(path))


def is_absolute_reference(reference: str) -> bool:
    """True when a requires reference starts with a path separator."""
    return reference.startswith("/") or reference.startswith("\\")


def is_regular_file(path: str) -> bool:
    return os.path.isfile(path)

# -----------------------------------------------------------------------------
# OUTPUT SINK API
# -----------------------------------------------------------------------------

@contextlib.contextmanager
def open_output_sink(output_path: Optional[str], charset: str) -> Iterator[TextIO]:
    """
    Open the combined output destination.

    Writes to stdout when no path is given, encoded with charset when stdout
    exposes its byte buffer. stdout is never closed here.
    The parent directory of a file destination is created on demand.

    Args:
        output_path: Destination file path, or empty for stdout.
        charset: Encoding for the destination.

    Yields:
        TextIO: Writable text stream.

    Raises:
        OSError: If the destination cannot be created.
    """
    if not output_path:
        buffer = getattr(sys.stdout, "buffer", None)
        if buffer is None:
            yield sys.stdout
            sys.stdout.flush()
            return

        sys.stdout.flush()
        out = io.TextIOWrapper(buffer, encoding=charset, newline="", write_through=True)
        try:
            yield out
        finally:
            out.flush()
            # detach so closing the wrapper later cannot close stdout
            out.detach()
        return

    parent = os.path.dirname(os.path.abspath(output_path))
    if parent:
        os.makedirs(parent, exist_ok=True)

    # newline="" keeps the sources' line endings byte-for-byte
    with open(output_path, "w", encoding=charset, newline="") as f:
        yield f
