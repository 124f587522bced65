#!/usr/bin/env python3
"""
VSSPARSER TYPE REGISTRY
-----------------------
Closed enumerations for the object kinds and value types a VSS file may
declare. Both registries map case-insensitively from the source token and
render back to the canonical lowercase spelling.

Author: VssParser Team
Date: 2026-01-16
"""

from enum import Enum


class InvalidToken(ValueError):
    """Raised when a token is not a member of a closed registry."""

    def __init__(self, registry: str, token: str):
        super().__init__(f"label:{token} is not a vss {registry}")
        self.registry = registry
        self.token = token


class VssObjectType(Enum):
    """The four kinds of VSS object. Actuator shares the Sensor grammar."""

    BRANCH = "branch"
    SENSOR = "sensor"
    ACTUATOR = "actuator"
    ATTRIBUTE = "attribute"

    @classmethod
    def parse(cls, token: str) -> "VssObjectType":
        try:
            return cls(token.strip().lower())
        except ValueError:
            raise InvalidToken("object type", token) from None

    def render(self) -> str:
        return self.value

    @property
    def is_leaf(self) -> bool:
        return self is not VssObjectType.BRANCH


class ValueType(Enum):
    """Primitive datatypes a leaf may carry. UNSET is never emitted."""

    UINT8 = "uint8"
    INT8 = "int8"
    UINT16 = "uint16"
    INT16 = "int16"
    UINT32 = "uint32"
    INT32 = "int32"
    UINT64 = "uint64"
    INT64 = "int64"
    BOOLEAN = "boolean"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    UNSET = "unset"

    @classmethod
    def parse(cls, token: str) -> "ValueType":
        key = token.strip().lower()
        # 'unset' is the internal sentinel, not a source token
        if key == cls.UNSET.value:
            raise InvalidToken("data type", token)
        try:
            return cls(key)
        except ValueError:
            raise InvalidToken("data type", token) from None

    def render(self) -> str:
        return self.value
