from __future__ import annotations

"""
filecombiner: dependency-ordered concatenation of source files.

Files declare their dependencies with embedded ``/*requires <path> */``
directives; the combiner discovers the full file set from a list of entry
files and writes the files out so every dependency precedes its dependents.
"""

__version__ = "0.1.0"
