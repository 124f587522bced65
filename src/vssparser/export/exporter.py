#!/usr/bin/env python3
"""
VSSPARSER EXPORTER - Machine-Readable Output
--------------------------------------------
Serializes a ParseResult into YAML (ruamel.yaml round-trip mode, so key order
is kept exactly as emitted) or JSON. Each object is keyed by its path and
carries a 'location' of the form 'file:line'.

Author: VssParser Team
Date: 2026-01-16
"""

import io
import json
from typing import Any, Dict, List

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from vssparser.core.models import Branch, Instance, Sensor, VssObject
from vssparser.parsing.pipeline import ParseResult


class SpecExporter:
    """
    The Reconstructor: Converts a parsed spec back into plain mappings.
    """

    SECTIONS = ("branches", "sensors", "attributes")

    def __init__(self):
        self.yaml = YAML(typ='rt')
        self.yaml.indent(mapping=2, sequence=4, offset=2)
        self.yaml.width = 4096

    def _object_map(self, obj: VssObject, result: ParseResult) -> CommentedMap:
        data = CommentedMap()
        data["type"] = obj.type.render()
        data["location"] = result.where(obj)
        if obj.description is not None:
            data["description"] = obj.description
        if obj.comment is not None:
            data["comment"] = obj.comment

        if isinstance(obj, Branch):
            data["aggregate"] = obj.aggregate
            if obj.instances:
                data["instances"] = [self._instance(i) for i in obj.instances]
            return data

        data["datatype"] = obj.datatype.render()
        if obj.arraysize.is_array:
            data["array"] = True
            if obj.arraysize.size is not None:
                data["arraysize"] = obj.arraysize.size
        data["unit"] = obj.unit.render()
        if obj.default:
            data["default"] = list(obj.default)
        if obj.allowed:
            data["allowed"] = list(obj.allowed)
        if isinstance(obj, Sensor):
            if obj.min is not None:
                data["min"] = obj.min
            if obj.max is not None:
                data["max"] = obj.max
        return data

    def _instance(self, instance: Instance) -> CommentedMap:
        data = CommentedMap()
        if instance.prefix:
            data["prefix"] = instance.prefix
        data["tokens"] = list(instance.tokens)
        return data

    def to_dict(self, result: ParseResult) -> CommentedMap:
        """Three ordered sections; objects keyed by path in encounter order."""
        tree = CommentedMap()
        collections: Dict[str, List[Any]] = {
            "branches": result.spec.branches,
            "sensors": result.spec.sensors,
            "attributes": result.spec.attributes,
        }
        for section in self.SECTIONS:
            entries = CommentedMap()
            for obj in collections[section]:
                # duplicate paths are legal; the later one gets a location suffix
                key = obj.path if obj.path not in entries else f"{obj.path}@{result.where(obj)}"
                entries[key] = self._object_map(obj, result)
            tree[section] = entries
        return tree

    def to_yaml(self, result: ParseResult) -> str:
        stream = io.StringIO()
        self.yaml.dump(self.to_dict(result), stream)
        return stream.getvalue()

    def to_json(self, result: ParseResult, indent: int = 2) -> str:
        return json.dumps(self.to_dict(result), indent=indent)
