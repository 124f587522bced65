#!/usr/bin/env python3
"""
VSSPARSER CORE MODELS
---------------------
Defines the fundamental data structures used across the parser: the source
records produced while loading, and the typed objects produced while parsing.

Author: VssParser Team
Date: 2026-01-16
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from vssparser.core.types import ValueType, VssObjectType
from vssparser.core.units import Unit


@dataclass(frozen=True)
class SourceFile:
    """One loaded file and the namespace prefix its objects inherit."""
    basename: str
    dirname: str
    prefix: Optional[str] = None

    @property
    def path(self) -> str:
        if self.dirname == ".":
            return self.basename
        return os.path.join(self.dirname, self.basename)


@dataclass(frozen=True)
class SourceLine:
    """
    A retained data line. Comments and blank lines never become SourceLines,
    so 'index' (position in the merged line table) and 'lineno' (physical
    line inside the file) usually differ.
    """
    index: int              # Absolute sequence number across the include tree
    lineno: int             # 1-based physical line number within 'source'
    source: SourceFile      # Shared by every line of the same file
    text: str               # Raw line content without terminator

    @property
    def indent(self) -> int:
        return len(self.text) - len(self.text.lstrip(' '))


class ArrayKind(Enum):
    NONE = "none"
    UNSIZED = "unsized"
    SIZED = "sized"


@dataclass(frozen=True)
class ArraySize:
    """
    Array shape of a leaf: not an array, an array marker ('[]') without an
    explicit size, or an explicit 'arraysize:'.
    """
    kind: ArrayKind = ArrayKind.NONE
    size: Optional[int] = None

    @classmethod
    def none(cls) -> "ArraySize":
        return cls()

    @classmethod
    def unsized(cls) -> "ArraySize":
        return cls(ArrayKind.UNSIZED)

    @classmethod
    def sized(cls, size: int) -> "ArraySize":
        return cls(ArrayKind.SIZED, size)

    @property
    def is_array(self) -> bool:
        return self.kind is not ArrayKind.NONE

    def render(self) -> Optional[str]:
        if self.kind is ArrayKind.SIZED:
            return str(self.size)
        if self.kind is ArrayKind.UNSIZED:
            return "[]"
        return None


@dataclass(frozen=True)
class Instance:
    """One instance axis of a branch, e.g. Row[1,2] or ["Left","Right"]."""
    tokens: Tuple[str, ...]
    prefix: Optional[str] = None

    def render(self) -> str:
        return f"{self.prefix or ''}[{','.join(self.tokens)}]"


@dataclass
class Branch:
    path: str
    location: int
    type: VssObjectType = VssObjectType.BRANCH
    description: Optional[str] = None
    comment: Optional[str] = None
    aggregate: bool = False
    instances: List[Instance] = field(default_factory=list)


@dataclass
class Attribute:
    path: str
    location: int
    type: VssObjectType = VssObjectType.ATTRIBUTE
    description: Optional[str] = None
    comment: Optional[str] = None
    datatype: ValueType = ValueType.UNSET
    arraysize: ArraySize = field(default_factory=ArraySize)
    default: List[str] = field(default_factory=list)
    allowed: List[str] = field(default_factory=list)
    unit: Unit = Unit.UNSET


@dataclass
class Sensor(Attribute):
    """Sensors and actuators share one record; 'type' tells them apart."""
    type: VssObjectType = VssObjectType.SENSOR
    min: Optional[int] = None
    max: Optional[int] = None

    @property
    def is_actuator(self) -> bool:
        return self.type is VssObjectType.ACTUATOR


VssObject = Union[Branch, Sensor, Attribute]


@dataclass
class VssSpec:
    """Root accumulator. Each list keeps source encounter order."""
    branches: List[Branch] = field(default_factory=list)
    sensors: List[Sensor] = field(default_factory=list)
    attributes: List[Attribute] = field(default_factory=list)

    def add(self, obj: VssObject) -> None:
        # Sensor subclasses Attribute, so test it first
        if isinstance(obj, Branch):
            self.branches.append(obj)
        elif isinstance(obj, Sensor):
            self.sensors.append(obj)
        else:
            self.attributes.append(obj)

    def objects(self) -> Iterator[VssObject]:
        """Every object, ordered by the line it was declared on."""
        merged: List[VssObject] = [*self.branches, *self.sensors, *self.attributes]
        return iter(sorted(merged, key=lambda obj: obj.location))

    def find(self, path: str) -> Optional[VssObject]:
        for obj in self.objects():
            if obj.path == path:
                return obj
        return None

    def __len__(self) -> int:
        return len(self.branches) + len(self.sensors) + len(self.attributes)
