#!/usr/bin/env python3
"""
VSSPARSER SCANNER - Value Grammars (Phase 3.1)
----------------------------------------------
Closed grammars for the values that follow a tag: scalars, numbers,
bracketed lists and instance groups. Every rule takes the merged buffer and
a position and either returns (new_position, value) or raises ScanFailure at
the position where the grammar stopped matching. Because a failure never
moves the caller's position, rules compose freely as alternatives
('a or b or c') and optional parts.

Author: VssParser Team
Date: 2026-01-16
"""

import re
from typing import Callable, List, Optional, Tuple, TypeVar

from vssparser.core.models import Instance

T = TypeVar("T")
Rule = Callable[[str, int], Tuple[int, T]]


class ScanFailure(Exception):
    """Recoverable grammar mismatch. Never leaves the parsing package."""

    def __init__(self, position: int, reason: str):
        super().__init__(reason)
        self.position = position
        self.reason = reason


class ValueScanner:
    """
    Stateless collection of value rules. Quoted and bare values must be
    ASCII; quoted values must be non-empty and may not contain their own
    quote character.
    """

    SPACES = re.compile(r'[ ]*')
    NEWLINE = re.compile(r'[ ]*(?:\n|\Z)')
    REST_OF_LINE = re.compile(r'[^\n]*')
    QUOTED = re.compile(r'"([^"\n]*)"|\'([^\'\n]*)\'')
    BARE = re.compile(r'[^\s\[\],"\']+')
    NUMBER = re.compile(r'-?\d+(?:\.\d*)?')
    WORD = re.compile(r'[A-Za-z0-9_.]+')
    IDENT = re.compile(r'[A-Za-z0-9_]+')
    # Group 1: tag name, followed by optional spaces and ':'
    TAG = re.compile(r'([A-Za-z0-9_]+)[ ]*:')

    # --- primitives -------------------------------------------------------

    def spaces(self, text: str, pos: int) -> int:
        return self.SPACES.match(text, pos).end()

    def end_of_line(self, text: str, pos: int) -> int:
        """Trailing spaces then a newline (or end of buffer)."""
        match = self.NEWLINE.match(text, pos)
        if not match:
            raise ScanFailure(self.spaces(text, pos), "unexpected trailing content")
        return match.end()

    def rest_of_line(self, text: str, pos: int) -> Tuple[int, str]:
        end = self.REST_OF_LINE.match(text, pos).end()
        nxt = end + 1 if end < len(text) else end
        return nxt, text[pos:end]

    def indent_at(self, text: str, pos: int) -> int:
        return self.spaces(text, pos) - pos

    def word(self, text: str, pos: int) -> Tuple[int, str]:
        """Alphanumeric token, dots allowed (object labels, type names)."""
        match = self.WORD.match(text, pos)
        if not match:
            raise ScanFailure(pos, "expected a word")
        return match.end(), match.group(0)

    def tag(self, text: str, pos: int) -> Tuple[int, str]:
        match = self.TAG.match(text, pos)
        if not match:
            raise ScanFailure(pos, "expected '<tag>:'")
        return match.end(), match.group(1)

    # --- values -----------------------------------------------------------

    def quoted(self, text: str, pos: int) -> Tuple[int, str]:
        start = self.spaces(text, pos)
        match = self.QUOTED.match(text, start)
        if not match:
            raise ScanFailure(start, "expected a quoted string")
        value = match.group(1) if match.group(1) is not None else match.group(2)
        if not value:
            raise ScanFailure(start, "empty string")
        if not value.isascii():
            raise ScanFailure(start, "non-ASCII character in string")
        return self.spaces(text, match.end()), value

    def bare(self, text: str, pos: int) -> Tuple[int, str]:
        start = self.spaces(text, pos)
        match = self.BARE.match(text, start)
        if not match:
            raise ScanFailure(start, "expected a value")
        if not match.group(0).isascii():
            raise ScanFailure(start, "non-ASCII character in value")
        return self.spaces(text, match.end()), match.group(0)

    def number(self, text: str, pos: int) -> Tuple[int, str]:
        start = self.spaces(text, pos)
        match = self.NUMBER.match(text, start)
        if not match:
            raise ScanFailure(start, "expected a number")
        return self.spaces(text, match.end()), match.group(0)

    def scalar(self, text: str, pos: int) -> Tuple[int, str]:
        return self.first_of(text, pos, self.quoted, self.bare)

    def first_of(self, text: str, pos: int, *rules: Rule) -> Tuple[int, T]:
        """Ordered alternation; reports the failure that got furthest."""
        best: Optional[ScanFailure] = None
        for rule in rules:
            try:
                return rule(text, pos)
            except ScanFailure as failure:
                if best is None or failure.position > best.position:
                    best = failure
        raise best

    def optional(self, text: str, pos: int, rule: Rule) -> Tuple[int, Optional[T]]:
        try:
            return rule(text, pos)
        except ScanFailure:
            return pos, None

    # --- compound values --------------------------------------------------

    def bracket_list(self, text: str, pos: int) -> Tuple[int, List[str]]:
        """[v1, v2, ...] on a single line. Empty slots are skipped."""
        start = self.spaces(text, pos)
        if not text.startswith("[", start):
            raise ScanFailure(start, "expected '['")
        values: List[str] = []
        pos = start + 1
        while True:
            pos, value = self.optional(text, pos, self.scalar)
            if value is not None:
                values.append(value)
            pos = self.spaces(text, pos)
            if text.startswith("]", pos):
                return self.spaces(text, pos + 1), values
            if text.startswith(",", pos):
                pos += 1
                continue
            raise ScanFailure(pos, "expected ',' or ']'")

    def inline_list(self, text: str, pos: int) -> Tuple[int, List[str]]:
        """A bracketed list, or a single scalar standing for a one-item list."""
        try:
            return self.bracket_list(text, pos)
        except ScanFailure as failure:
            if text.startswith("[", self.spaces(text, pos)):
                raise failure
        pos, value = self.scalar(text, pos)
        return pos, [value]

    def instance(self, text: str, pos: int) -> Tuple[int, Instance]:
        """[prefix][tok1, tok2, ...] where tokens may be quoted."""
        start = self.spaces(text, pos)
        pos, prefix = self.optional(text, start, self._ident)
        pos = self.spaces(text, pos)
        if not text.startswith("[", pos):
            raise ScanFailure(pos, "expected '[' opening an instance list")
        tokens: List[str] = []
        pos += 1
        while True:
            pos = self.spaces(text, pos)
            quote = text[pos] if pos < len(text) and text[pos] in "\"'" else None
            if quote:
                pos += 1
            pos, token = self.optional(text, pos, self._ident)
            if quote:
                if not text.startswith(quote, pos):
                    raise ScanFailure(pos, "unterminated quoted instance token")
                pos += 1
            if token is not None:
                tokens.append(token)
            pos = self.spaces(text, pos)
            if text.startswith("]", pos):
                return self.spaces(text, pos + 1), Instance(tuple(tokens), prefix)
            if text.startswith(",", pos):
                pos += 1
                continue
            raise ScanFailure(pos, "expected ',' or ']' in instance list")

    def instances_inline(self, text: str, pos: int) -> Tuple[int, List[Instance]]:
        """One or more instance groups side by side on one line."""
        pos, first = self.instance(text, pos)
        groups = [first]
        while True:
            pos, group = self.optional(text, pos, self.instance)
            if group is None:
                return pos, groups
            groups.append(group)

    def _ident(self, text: str, pos: int) -> Tuple[int, str]:
        match = self.IDENT.match(text, pos)
        if not match:
            raise ScanFailure(pos, "expected an identifier")
        return match.end(), match.group(0)
