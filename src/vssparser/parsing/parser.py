#!/usr/bin/env python3
"""
VSSPARSER OBJECT PARSER - Indentation-Aware Descent (Phase 3.2)
---------------------------------------------------------------
Walks the merged buffer one object at a time. An object is a '<label>:'
header followed by a deeper-indented body; the indentation of the first body
line is the object's field level. Fields are searched only on lines sitting
exactly at that level, so nested objects and continuation lines never
masquerade as fields.

Every grammar failure carries a buffer position. Before leaving this module
it is translated through the LocationIndex into a file:line qualified
VssError with a one-line excerpt; ScanFailure never escapes.

Author: VssParser Team
Date: 2026-01-16
"""

import logging
import re
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Type

from vssparser.core.config import ParserOptions
from vssparser.core.errors import (
    ErrorKind,
    VssError,
    VssSemanticError,
    VssStructuralError,
    VssSyntaxError,
)
from vssparser.core.models import (
    ArrayKind,
    ArraySize,
    Attribute,
    Branch,
    Sensor,
    VssObject,
    VssSpec,
)
from vssparser.core.types import InvalidToken, ValueType, VssObjectType
from vssparser.core.units import Unit
from vssparser.loading.locator import LocationIndex
from vssparser.parsing.scanner import ScanFailure, ValueScanner

logger = logging.getLogger("vssparser.parser")

FieldReader = Callable[[VssObject, int, int, int], None]

# Always accepted at the field level, whatever the object type
ALWAYS_ALLOWED = ("type", "deprecation", "description", "comment")


class VssParser:
    """
    Recursive-descent parser over a LocationIndex buffer.

    Usage:
        spec = VssParser(index).parse()
    """

    # Group 1: object label. The header must end its line.
    HEADER = re.compile(r'([A-Za-z0-9_.\-]+)[ ]*:[ ]*(?:\n|\Z)')
    BLOCK_MARKERS = ("|", ">", "|-", ">-")
    INTEGER = re.compile(r'-?\d+')
    BULLET = re.compile(r'-(?: |\n|\Z)')

    def __init__(self, index: LocationIndex, options: Optional[ParserOptions] = None):
        self.index = index
        self.text = index.buffer
        self.options = options or ParserOptions()
        self.scan = ValueScanner()

        # Field extraction order per object kind
        self.field_sets: Dict[VssObjectType, Tuple[str, ...]] = {
            VssObjectType.BRANCH: ("description", "comment", "aggregate", "instances"),
            VssObjectType.SENSOR: ("description", "comment", "datatype", "arraysize",
                                   "default", "allowed", "unit", "min", "max"),
            VssObjectType.ATTRIBUTE: ("description", "comment", "datatype", "arraysize",
                                      "unit", "default", "allowed"),
        }
        self.field_sets[VssObjectType.ACTUATOR] = self.field_sets[VssObjectType.SENSOR]

        # Attributes tolerate bounds tags without storing them
        self.authorized: Dict[VssObjectType, Tuple[str, ...]] = {
            kind: fields + ALWAYS_ALLOWED for kind, fields in self.field_sets.items()
        }
        self.authorized[VssObjectType.ATTRIBUTE] += ("min", "max")

        self.readers: Dict[str, FieldReader] = {
            "description": self._read_description,
            "comment": self._read_comment,
            "datatype": self._read_datatype,
            "arraysize": self._read_arraysize,
            "unit": self._read_unit,
            "default": self._read_default,
            "allowed": self._read_allowed,
            "min": self._read_min,
            "max": self._read_max,
            "aggregate": self._read_aggregate,
            "instances": self._read_instances,
        }

    # --- entry point ------------------------------------------------------

    def parse(self) -> VssSpec:
        """Parses every object of the buffer. Any failure aborts the whole run."""
        spec = VssSpec()
        pos = 0
        try:
            while pos < len(self.text):
                pos, obj = self.parse_object(pos)
                spec.add(obj)
                logger.debug(f"{obj.type.render()} {obj.path} @line {obj.location}")
        except ScanFailure as failure:
            raise self._located(VssSyntaxError, failure.position, failure.reason) from None
        return spec

    def parse_object(self, pos: int) -> Tuple[int, VssObject]:
        """Header, type, fields, tag check, then skip the rest of the block."""
        header_indent = self.scan.indent_at(self.text, pos)
        label_pos = pos + header_indent
        match = self.HEADER.match(self.text, label_pos)
        if not match:
            raise ScanFailure(label_pos, "expected object header '<label>:'")

        body = match.end()
        location = self.index.locate(label_pos)
        line = self.index.line_at(location)
        label = match.group(1)
        path = f"{line.source.prefix}.{label}" if line.source.prefix else label

        if body >= len(self.text) or self.scan.indent_at(self.text, body) <= header_indent:
            raise self._structural(ErrorKind.OBJECT_TYPE_NOT_SET, label_pos,
                                   f"vss object '{path}' has no indented body")
        level = self.scan.indent_at(self.text, body)

        vtype = self._read_type(body, level, label_pos, path)
        obj = self._new_object(vtype, path, location)

        for name in self.field_sets[vtype]:
            found = self._find_field(body, level, name)
            if found is not None:
                line_pos, value_pos = found
                self.readers[name](obj, line_pos, value_pos, level)

        if vtype.is_leaf and obj.datatype is ValueType.UNSET and self.options.strict_datatype:
            raise self._semantic(ErrorKind.DATATYPE_INVALID, label_pos,
                                 f"datatype not set for {vtype.render()} '{path}'")

        self._check_authorized(body, level, self.authorized[vtype])
        return self._skip_block(body, header_indent), obj

    # --- line navigation --------------------------------------------------

    def _next_line(self, pos: int) -> int:
        end = self.text.find("\n", pos)
        return len(self.text) if end == -1 else end + 1

    def _field_lines(self, body: int, level: int) -> Iterator[int]:
        """Yields the content position of each line at exactly 'level'."""
        pos = body
        while pos < len(self.text):
            indent = self.scan.indent_at(self.text, pos)
            if indent < level:
                return
            if indent == level:
                yield pos + indent
            pos = self._next_line(pos)

    def _find_field(self, body: int, level: int, label: str) -> Optional[Tuple[int, int]]:
        """(line content position, value position) of the first '<label>:' line."""
        for content in self._field_lines(body, level):
            match = self.scan.TAG.match(self.text, content)
            if match and match.group(1) == label:
                return content, match.end()
        return None

    def _deeper_lines(self, pos: int, level: int) -> Iterator[Tuple[int, int]]:
        """Consecutive lines indented past 'level': (line start, indent)."""
        while pos < len(self.text):
            indent = self.scan.indent_at(self.text, pos)
            if indent <= level:
                return
            yield pos, indent
            pos = self._next_line(pos)

    def _skip_block(self, pos: int, header_indent: int) -> int:
        for line_pos, _ in self._deeper_lines(pos, header_indent):
            pos = self._next_line(line_pos)
        return pos

    def _opens_block(self, line_pos: int, indent: int) -> bool:
        """'<label>:' alone on its line with a deeper-indented line after it."""
        if not self.HEADER.match(self.text, line_pos + indent):
            return False
        nxt = self._next_line(line_pos)
        return nxt < len(self.text) and self.scan.indent_at(self.text, nxt) > indent

    def _at_line_end(self, pos: int) -> bool:
        pos = self.scan.spaces(self.text, pos)
        return pos >= len(self.text) or self.text[pos] == "\n"

    # --- object construction ----------------------------------------------

    def _read_type(self, body: int, level: int, header_pos: int, path: str) -> VssObjectType:
        found = self._find_field(body, level, "type")
        if found is None:
            raise self._structural(ErrorKind.OBJECT_TYPE_NOT_SET, header_pos,
                                   f"vss object type not set for '{path}'")
        line_pos, value_pos = found
        pos, token = self.scan.word(self.text, self.scan.spaces(self.text, value_pos))
        self.scan.end_of_line(self.text, pos)
        try:
            return VssObjectType.parse(token)
        except InvalidToken as e:
            raise self._structural(ErrorKind.OBJECT_TYPE_INVALID, line_pos, str(e)) from None

    def _new_object(self, vtype: VssObjectType, path: str, location: int) -> VssObject:
        if vtype is VssObjectType.BRANCH:
            return Branch(path=path, location=location)
        if vtype is VssObjectType.ATTRIBUTE:
            return Attribute(path=path, location=location)
        return Sensor(path=path, location=location, type=vtype)

    def _check_authorized(self, body: int, level: int, allowed: Tuple[str, ...]) -> None:
        for content in self._field_lines(body, level):
            match = self.scan.TAG.match(self.text, content)
            if match and match.group(1) not in allowed:
                raise self._semantic(ErrorKind.UNAUTHORIZED_TAG, content,
                                     f"unauthorized tag '{match.group(1)}:'")

    # --- field readers ----------------------------------------------------

    def _read_text(self, value_pos: int, level: int) -> Optional[str]:
        """Tag line value plus any deeper continuation lines, space-joined."""
        pos, first = self.scan.rest_of_line(self.text, value_pos)
        parts: List[str] = []
        first = first.strip()
        if first and first not in self.BLOCK_MARKERS:
            parts.append(first)
        for line_pos, indent in self._deeper_lines(pos, level):
            # a nested object header ends the text block
            if self._opens_block(line_pos, indent):
                break
            pos, chunk = self.scan.rest_of_line(self.text, line_pos + indent)
            if chunk.strip():
                parts.append(chunk.strip())
        if not parts:
            return None
        text = " ".join(parts)
        if len(parts) == 1 and len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
            text = text[1:-1]
        return text

    def _read_description(self, obj: VssObject, line_pos: int, value_pos: int, level: int) -> None:
        obj.description = self._read_text(value_pos, level)

    def _read_comment(self, obj: VssObject, line_pos: int, value_pos: int, level: int) -> None:
        obj.comment = self._read_text(value_pos, level)

    def _read_datatype(self, obj: Attribute, line_pos: int, value_pos: int, level: int) -> None:
        pos, token = self.scan.word(self.text, self.scan.spaces(self.text, value_pos))
        pos = self.scan.spaces(self.text, pos)
        is_array = self.text.startswith("[]", pos)
        if is_array:
            pos += 2
        self.scan.end_of_line(self.text, pos)
        try:
            obj.datatype = ValueType.parse(token)
        except InvalidToken as e:
            raise self._semantic(ErrorKind.DATATYPE_INVALID, line_pos, str(e)) from None
        # an explicit arraysize always wins over the bare marker
        if is_array and obj.arraysize.kind is ArrayKind.NONE:
            obj.arraysize = ArraySize.unsized()

    def _read_arraysize(self, obj: Attribute, line_pos: int, value_pos: int, level: int) -> None:
        token = self._read_token(line_pos, value_pos, ErrorKind.ARRAYSIZE_NOT_NUMERIC, "arraysize")
        if not token.isdigit():
            raise self._semantic(ErrorKind.ARRAYSIZE_NOT_NUMERIC, line_pos,
                                 f"arraysize:{token} is not a positive integer")
        obj.arraysize = ArraySize.sized(int(token))

    def _read_unit(self, obj: Attribute, line_pos: int, value_pos: int, level: int) -> None:
        pos, token = self.scan.scalar(self.text, value_pos)
        self.scan.end_of_line(self.text, pos)
        try:
            obj.unit = Unit.parse(token)
        except InvalidToken as e:
            raise self._semantic(ErrorKind.UNIT_INVALID, line_pos, str(e)) from None

    def _read_bound(self, line_pos: int, value_pos: int, name: str) -> int:
        try:
            pos, token = self.scan.number(self.text, value_pos)
            self.scan.end_of_line(self.text, pos)
        except ScanFailure:
            _, rest = self.scan.rest_of_line(self.text, value_pos)
            raise self._semantic(ErrorKind.BOUNDS_NOT_NUMERIC, line_pos,
                                 f"{name}:{rest.strip()} is not numeric") from None
        if not self.INTEGER.fullmatch(token):
            raise self._semantic(ErrorKind.BOUNDS_NOT_NUMERIC, line_pos,
                                 f"{name}:{token} is not an integer")
        return int(token)

    def _read_min(self, obj: Sensor, line_pos: int, value_pos: int, level: int) -> None:
        obj.min = self._read_bound(line_pos, value_pos, "min")

    def _read_max(self, obj: Sensor, line_pos: int, value_pos: int, level: int) -> None:
        obj.max = self._read_bound(line_pos, value_pos, "max")

    def _read_token(self, line_pos: int, value_pos: int, kind: ErrorKind, name: str) -> str:
        """The single bare value of a numeric tag; anything else is 'kind'."""
        try:
            pos, token = self.scan.bare(self.text, value_pos)
            self.scan.end_of_line(self.text, pos)
        except ScanFailure:
            _, rest = self.scan.rest_of_line(self.text, value_pos)
            raise self._semantic(kind, line_pos, f"{name}:{rest.strip()} is not numeric") from None
        return token

    def _read_list(self, value_pos: int, level: int) -> List[str]:
        """Inline '[a, b]' / single scalar, or a block of '- item' bullets."""
        if not self._at_line_end(value_pos):
            pos, values = self.scan.inline_list(self.text, value_pos)
            self.scan.end_of_line(self.text, pos)
            return values

        values: List[str] = []
        pos = self._next_line(value_pos)
        bullet_indent = None
        for line_pos, indent in self._deeper_lines(pos, level):
            content = line_pos + indent
            if not self.BULLET.match(self.text, content) or indent != (bullet_indent or indent):
                break
            bullet_indent = indent
            item_pos, value = self.scan.scalar(self.text, content + 1)
            self.scan.end_of_line(self.text, item_pos)
            values.append(value)
        return values

    def _read_default(self, obj: Attribute, line_pos: int, value_pos: int, level: int) -> None:
        obj.default = self._read_list(value_pos, level)

    def _read_allowed(self, obj: Attribute, line_pos: int, value_pos: int, level: int) -> None:
        obj.allowed = self._read_list(value_pos, level)

    def _read_aggregate(self, obj: Branch, line_pos: int, value_pos: int, level: int) -> None:
        start = self.scan.spaces(self.text, value_pos)
        pos, token = self.scan.word(self.text, start)
        self.scan.end_of_line(self.text, pos)
        if token.lower() not in ("true", "false"):
            raise ScanFailure(start, f"aggregate expects true or false, got '{token}'")
        if self.options.legacy_aggregate:
            obj.aggregate = token != "true"
        else:
            obj.aggregate = token.lower() == "true"

    def _read_instances(self, obj: Branch, line_pos: int, value_pos: int, level: int) -> None:
        if not self._at_line_end(value_pos):
            pos, groups = self.scan.instances_inline(self.text, value_pos)
            self.scan.end_of_line(self.text, pos)
            obj.instances = groups
            return

        groups = []
        pos = self._next_line(value_pos)
        bullet_indent = None
        for line_pos, indent in self._deeper_lines(pos, level):
            content = line_pos + indent
            if not self.BULLET.match(self.text, content) or indent != (bullet_indent or indent):
                break
            bullet_indent = indent
            item_pos, found = self.scan.instances_inline(self.text, content + 1)
            self.scan.end_of_line(self.text, item_pos)
            groups.extend(found)
        if not groups:
            raise ScanFailure(value_pos, "instances: expects at least one instance group")
        obj.instances = groups

    # --- error translation ------------------------------------------------

    def _located(self, cls: Type[VssError], position: int, message: str, **extra) -> VssError:
        if not self.index.lines:
            return cls(message=message, **extra)
        line = self.index.line_at(self.index.locate(position))
        return cls(message=message, filename=line.source.path, line=line.lineno,
                   excerpt=self.index.excerpt(position), **extra)

    def _semantic(self, kind: ErrorKind, position: int, message: str) -> VssError:
        return self._located(VssSemanticError, position, message, kind=kind)

    def _structural(self, kind: ErrorKind, position: int, message: str) -> VssError:
        return self._located(VssStructuralError, position, message, kind=kind)
