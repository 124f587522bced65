#!/usr/bin/env python3
"""
VSSPARSER LOADER CONTEXT
------------------------
State object for one recursive load. It is created by the top-level
VssLoader.load() call and passed down every #include expansion, so the line
table and the sequence counter are owned by exactly one caller.

Author: VssParser Team
Date: 2026-01-16
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from vssparser.core.models import SourceFile, SourceLine


@dataclass
class IncludeFrame:
    """One in-progress file on the include stack."""
    path: str
    prefix: Optional[str]
    source: SourceFile


@dataclass
class LoaderContext:
    """
    Accumulates the retained data lines of the whole include tree.

    The context is append-only while loading; once VssLoader.load() returns,
    callers treat 'lines' as frozen and hand it to LocationIndex.build().
    """
    lines: List[SourceLine] = field(default_factory=list)   # Ordered line table
    files: List[SourceFile] = field(default_factory=list)   # Every file loaded, in load order
    stack: List[IncludeFrame] = field(default_factory=list) # Current include chain
    in_progress: Set[Tuple[str, Optional[str]]] = field(default_factory=set)

    @property
    def sequence(self) -> int:
        """Next absolute line number to assign."""
        return len(self.lines)

    def append(self, lineno: int, source: SourceFile, text: str) -> SourceLine:
        line = SourceLine(index=self.sequence, lineno=lineno, source=source, text=text)
        self.lines.append(line)
        return line

    def enter(self, path: str, prefix: Optional[str], source: SourceFile) -> None:
        self.in_progress.add((path, prefix))
        self.stack.append(IncludeFrame(path, prefix, source))
        self.files.append(source)

    def leave(self) -> None:
        frame = self.stack.pop()
        self.in_progress.discard((frame.path, frame.prefix))

    def is_loading(self, path: str, prefix: Optional[str]) -> bool:
        return (path, prefix) in self.in_progress

    def chain(self) -> str:
        return " -> ".join(frame.path for frame in self.stack)
