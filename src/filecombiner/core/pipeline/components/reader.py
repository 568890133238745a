from __future__ import annotations

"""
Source File Reading Component.

Decodes a file with a named charset. Unlike a lenient transcription reader,
undecodable bytes are an error here: the combined output must reproduce the
sources exactly.
"""

from filecombiner.domain.errors import CombineIOError


def read_source_text(file_path: str, charset: str) -> str:
    """
    Read a whole file as text.

    Line endings are returned untranslated.

    Args:
        file_path: Absolute path to the file.
        charset: Codec name used to decode the bytes.

    Returns:
        str: The decoded contents.

    Raises:
        CombineIOError: If the file cannot be read or decoded.
    """
    try:
        with open(file_path, "r", encoding=charset, newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise CombineIOError(
            f"Cannot decode '{file_path}' as {charset}: {e.reason}", path=file_path
        ) from e
    except OSError as e:
        raise CombineIOError(f"Cannot read '{file_path}': {e}", path=file_path) from e
