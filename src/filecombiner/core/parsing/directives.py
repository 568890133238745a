from __future__ import annotations

"""
Requires Directive Parser.

Extracts embedded dependency directives of the form

    /*requires path/to/file.js */

from a file's text. Directives are removed from the output; everything
else, ordinary block comments included, is preserved byte-for-byte.
Directives are recognized anywhere in the file, not only at the top.
"""

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from filecombiner.domain.errors import MalformedDirectiveError, MissingDependencyError
from filecombiner.domain.source_models import SourceFile
from filecombiner.infra.fs import canonical_path, is_absolute_reference, is_regular_file

if TYPE_CHECKING:
    from filecombiner.core.services.registry import SourceRegistry

logger = logging.getLogger(__name__)

DIRECTIVE_MARKER = "*requires"
DIRECTIVE_OPEN = "/" + DIRECTIVE_MARKER
DIRECTIVE_CLOSE = "*/"


@dataclass(frozen=True)
class ParsedSource:
    """
    Outcome of scanning one file.

    Attributes:
        contents: Text with every requires directive removed.
        references: Trimmed directive bodies in declaration order.
    """
    contents: str
    references: List[str]


# -----------------------------------------------------------------------------
# TEXT LEVEL
# -----------------------------------------------------------------------------

def extract_directives(text: str, path: str = "<string>") -> ParsedSource:
    """
    Split raw text into cleaned contents and declared references.

    A directive opens at a '/' that is not immediately preceded by '*'
    (the closing slash of a previous comment) and is directly followed by
    '*requires'. Its body runs up to the next '*/'.

    Args:
        text: Decoded file contents.
        path: File name used in error messages.

    Returns:
        ParsedSource: Cleaned text and references.

    Raises:
        MalformedDirectiveError: If a directive has no closing '*/'.
    """
    out: List[str] = []
    references: List[str] = []
    pos = 0

    while True:
        start = text.find(DIRECTIVE_OPEN, pos)
        if start == -1:
            out.append(text[pos:])
            break

        if start > 0 and text[start - 1] == "*":
            # Closing slash of "*/", not the opening of a directive
            out.append(text[pos:start + 1])
            pos = start + 1
            continue

        body_start = start + len(DIRECTIVE_OPEN)
        end = text.find(DIRECTIVE_CLOSE, body_start)
        if end == -1:
            raise MalformedDirectiveError(path, text[start:start + 80])

        out.append(text[pos:start])
        references.append(text[body_start:end].strip())
        pos = end + len(DIRECTIVE_CLOSE)

    return ParsedSource(contents="".join(out), references=references)


def resolve_reference(reference: str, directory: str) -> str:
    """
    Turn a directive body into a canonical path.

    References that do not start with a path separator are relative to the
    declaring file's directory, never to the working directory.
    """
    if is_absolute_reference(reference) or os.path.isabs(reference):
        return canonical_path(reference)
    return canonical_path(os.path.join(directory, reference))


# -----------------------------------------------------------------------------
# FILE LEVEL
# -----------------------------------------------------------------------------

def parse_source_file(
        source: SourceFile,
        text: str,
        registry: "SourceRegistry",
        verbose: bool = False,
) -> List[SourceFile]:
    """
    Parse one file's text, record its dependencies and set its contents.

    Every resolved dependency is fetched from the registry (created if
    absent) and appended to source.dependencies in declaration order.
    A file that requires itself keeps the declaration but is never queued
    again; the graph builder drops the self edge.

    Args:
        source: The unparsed record for the file.
        text: The file's decoded contents.
        registry: Run-scoped registry that owns all records.
        verbose: Log the dependency trail at INFO instead of DEBUG.

    Returns:
        List[SourceFile]: Dependencies that were still unparsed when found.

    Raises:
        MalformedDirectiveError: On an unterminated directive.
        MissingDependencyError: If a reference does not name a regular file.
    """
    level = logging.INFO if verbose else logging.DEBUG
    parsed = extract_directives(text, source.path)
    discovered: List[SourceFile] = []

    for reference in parsed.references:
        logger.log(level, f"... has dependency on {reference}")
        dep_path = resolve_reference(reference, source.directory)

        if not is_regular_file(dep_path):
            raise MissingDependencyError(dep_path, source.path)

        dependency = registry.get(dep_path)
        if dependency is source:
            logger.debug(f"Self-reference in '{source.path}'")
        elif not dependency.is_parsed and dependency not in discovered:
            discovered.append(dependency)
        source.add_dependency(dependency)

    if not parsed.references:
        logger.log(level, "... no dependencies found.")

    source.set_contents(parsed.contents)
    return discovered
