#!/usr/bin/env python3
"""
VSSPARSER ERRORS
----------------
Domain error taxonomy. Every failure that leaves the loader or the parser is
one of these, already qualified with the offending file, line and a one-line
excerpt of the source.

Author: VssParser Team
Date: 2026-01-16
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    OBJECT_TYPE_NOT_SET = "vss-objtype-not-set"
    OBJECT_TYPE_INVALID = "vss-objtype-invalid"
    DATATYPE_INVALID = "vss-datatype-invalid"
    UNIT_INVALID = "vss-objunit-invalid"
    UNAUTHORIZED_TAG = "vss-unauthorized-tag"
    ARRAYSIZE_NOT_NUMERIC = "vss-arraysize-not-numeric"
    BOUNDS_NOT_NUMERIC = "vss-bounds-not-numeric"


class VssError(Exception):
    """Base class for all qualified parsing failures."""

    def __init__(self, message: str, filename: Optional[str] = None,
                 line: Optional[int] = None, excerpt: Optional[str] = None):
        self.message = message
        self.filename = filename
        self.line = line
        self.excerpt = excerpt
        super().__init__(self._format())

    @property
    def where(self) -> str:
        if self.filename is None:
            return ""
        if self.line is None:
            return self.filename
        return f"{self.filename}:{self.line}"

    def _format(self) -> str:
        text = f"{self.where} {self.message}" if self.where else self.message
        if self.excerpt:
            text += f" ('{self.excerpt}')"
        return text


class VssIOError(VssError):
    """A source file is missing, unreadable or not valid text."""


class CyclicIncludeError(VssIOError):
    """An #include chain re-entered a file that is still being loaded."""


class VssSyntaxError(VssError):
    """Low-level grammar mismatch."""


class VssSemanticError(VssError):
    """A well-formed value outside its closed registry or numeric domain."""

    def __init__(self, kind: ErrorKind, message: str, **location):
        self.kind = kind
        super().__init__(message, **location)


class VssStructuralError(VssError):
    """The object type is missing or unresolvable."""

    def __init__(self, kind: ErrorKind, message: str, **location):
        self.kind = kind
        super().__init__(message, **location)
