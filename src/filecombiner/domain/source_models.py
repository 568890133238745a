from __future__ import annotations

"""
Source File Domain Model.

A SourceFile is the in-memory record of one physical file. Records are
owned by the SourceRegistry; dependency lists hold shared references to
registry-owned records.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(eq=False)
class SourceFile:
    """
    One physical file, identified by its canonical absolute path.

    Attributes:
        path: Canonical absolute path (registry key).
        contents: Directive-stripped text, or None while unparsed.
        dependencies: Required files in declaration order.
    """
    path: str
    contents: Optional[str] = None
    dependencies: List["SourceFile"] = field(default_factory=list)

    @property
    def directory(self) -> str:
        """Parent directory, used to resolve relative requires."""
        return os.path.dirname(self.path)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def is_parsed(self) -> bool:
        return self.contents is not None

    def set_contents(self, contents: str) -> None:
        """Assign the cleaned text. Contents are write-once."""
        if self.contents is not None:
            raise RuntimeError(f"Source file already parsed: {self.path}")
        self.contents = contents

    def add_dependency(self, dependency: "SourceFile") -> None:
        self.dependencies.append(dependency)

    def __repr__(self) -> str:
        return f"SourceFile({self.path!r}, deps={[d.name for d in self.dependencies]})"
