#!/usr/bin/env python3
"""
VSSPARSER LOADER - Source & Include Resolver (Phase 1)
------------------------------------------------------
Reads .vspec files, classifies every physical line and expands #include
directives depth-first into a single ordered line table. Only data lines are
retained; comments and blank lines are dropped here, while their physical
line numbers still count toward the positions reported in errors.

Author: VssParser Team
Date: 2026-01-16
"""

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from vssparser.core.errors import CyclicIncludeError, VssIOError, VssSyntaxError
from vssparser.core.models import SourceFile
from vssparser.loading.context import LoaderContext

logger = logging.getLogger("vssparser.loader")

# Byte-supplying collaborator keyed by the resolved filename
Reader = Callable[[str], bytes]


def read_file(path: str) -> bytes:
    """Default reader: whole-file read from the local filesystem."""
    return Path(path).read_bytes()


class LineKind(Enum):
    INCLUDE = "include"
    COMMENT = "comment"
    EMPTY = "empty"
    DATA = "data"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str
    include_path: Optional[str] = None
    include_prefix: Optional[str] = None


class VssLoader:
    """
    Turns a root filename into a LoaderContext holding every data line of the
    include tree, each tagged with its file, physical line and namespace
    prefix.
    """

    # Group 1: everything after the directive keyword
    INCLUDE_PATTERN = re.compile(r'^\s*#include(?=\s|$)(.*)$')

    def __init__(self, reader: Reader = read_file, encoding: str = "utf-8-sig"):
        self.reader = reader
        self.encoding = encoding

    def load(self, filename: str, dirname: Optional[str] = None,
             prefix: Optional[str] = None) -> LoaderContext:
        """Loads the root file and all of its includes."""
        context = LoaderContext()
        self._load_file(context, filename, dirname, prefix)
        logger.debug(f"Loaded {len(context.files)} file(s), {len(context.lines)} data line(s)")
        return context

    def classify(self, raw_line: str) -> ClassifiedLine:
        """Sorts one physical line into include / comment / empty / data."""
        stripped = raw_line.strip()
        if not stripped:
            return ClassifiedLine(LineKind.EMPTY, raw_line)

        match = self.INCLUDE_PATTERN.match(raw_line)
        if match:
            operands = match.group(1).split()
            if len(operands) not in (1, 2):
                raise ValueError("malformed #include (expected '<path> [<prefix>]')")
            prefix = operands[1] if len(operands) == 2 else None
            return ClassifiedLine(LineKind.INCLUDE, raw_line, operands[0], prefix)

        if stripped.startswith('#'):
            return ClassifiedLine(LineKind.COMMENT, raw_line)

        return ClassifiedLine(LineKind.DATA, raw_line.rstrip())

    def physical_lines(self, text: str) -> List[str]:
        """Newline-only split. Form feeds and Unicode line separators stay inside their line."""
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def resolve(self, filename: str, dirname: Optional[str]) -> str:
        """Absolute paths ignore the including directory."""
        if os.path.isabs(filename) or not dirname:
            return os.path.normpath(filename)
        return os.path.normpath(os.path.join(dirname, filename))

    def _decode(self, path: str, payload: bytes) -> str:
        try:
            return payload.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise VssIOError(f"file is not valid {self.encoding} text ({e.reason})", filename=path)

    def _load_file(self, context: LoaderContext, filename: str,
                   dirname: Optional[str], prefix: Optional[str],
                   origin: Optional[str] = None, origin_line: Optional[int] = None) -> None:
        path = self.resolve(filename, dirname)

        if context.is_loading(path, prefix):
            raise CyclicIncludeError(
                f"cyclic #include of {path} ({context.chain()} -> {path})",
                filename=origin, line=origin_line,
            )

        try:
            payload = self.reader(path)
        except OSError as e:
            message = f"fail to open {path} ({e.strerror or e})"
            if origin is None:
                raise VssIOError(message, filename=path) from e
            raise VssIOError(message, filename=origin, line=origin_line) from e

        text = self._decode(path, payload)
        source = SourceFile(
            basename=os.path.basename(path),
            dirname=os.path.dirname(path) or ".",
            prefix=prefix,
        )
        logger.debug(f"Reading {path} (prefix={prefix})")

        context.enter(path, prefix, source)
        try:
            for lineno, raw_line in enumerate(self.physical_lines(text), 1):
                self._process_line(context, source, path, lineno, raw_line)
        finally:
            context.leave()

        logger.debug(f"Done file: {source.basename}")

    def _process_line(self, context: LoaderContext, source: SourceFile,
                      path: str, lineno: int, raw_line: str) -> None:
        try:
            line = self.classify(raw_line)
        except ValueError as e:
            raise VssSyntaxError(str(e), filename=path, line=lineno, excerpt=raw_line.strip())

        if line.kind is LineKind.INCLUDE:
            # An include without its own prefix keeps the current one
            child_prefix = line.include_prefix or source.prefix
            logger.debug(f"{path}:{lineno} includes {line.include_path} (prefix={child_prefix})")
            self._load_file(context, line.include_path, source.dirname, child_prefix,
                            origin=path, origin_line=lineno)
        elif line.kind is LineKind.DATA:
            leading = line.text[:len(line.text) - len(line.text.lstrip())]
            if '\t' in leading:
                raise VssSyntaxError("tab character in indentation (spaces only)",
                                     filename=path, line=lineno, excerpt=line.text.strip())
            context.append(lineno, source, line.text)
