#!/usr/bin/env python3
"""
VSSPARSER PIPELINE - The Orchestrator
-------------------------------------
Runs the three phases in their fixed order: load the include tree, build the
location index over the merged buffer, then parse objects. Nothing is
returned unless every phase succeeds.

Author: VssParser Team
Date: 2026-01-16
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

from vssparser.core.config import ParserOptions
from vssparser.core.errors import VssError
from vssparser.core.models import SourceLine, VssObject, VssSpec
from vssparser.loading.loader import Reader, VssLoader, read_file
from vssparser.loading.locator import LocationIndex
from vssparser.parsing.parser import VssParser

logger = logging.getLogger("vssparser.pipeline")


@dataclass
class ParseResult:
    """A parsed spec together with the index its locations resolve against."""
    spec: VssSpec
    index: LocationIndex

    def source_of(self, obj: VssObject) -> SourceLine:
        return self.index.line_at(obj.location)

    def where(self, obj: VssObject) -> str:
        return self.index.describe(obj.location)


class VssPipeline:
    """
    Entry point for library callers.

    Usage:
        result = VssPipeline().run("spec/VehicleSignalSpecification.vspec")
        for sensor in result.spec.sensors: ...
    """

    def __init__(self, options: Optional[ParserOptions] = None, reader: Reader = read_file):
        self.options = options or ParserOptions()
        self.loader = VssLoader(reader=reader, encoding=self.options.encoding)

    def run(self, filename: str, prefix: Optional[str] = None) -> ParseResult:
        try:
            # --- PHASE 1: LOAD & INCLUDE EXPANSION ---
            context = self.loader.load(filename, prefix=prefix)

            # --- PHASE 2: LOCATION INDEX ---
            index = LocationIndex.build(context.lines)

            # --- PHASE 3: OBJECT PARSING ---
            spec = VssParser(index, self.options).parse()
        except VssError as e:
            logger.error(f"Parsing aborted: {e}")
            raise

        logger.info(
            f"{filename}: {len(context.files)} file(s), {len(spec.branches)} branches, "
            f"{len(spec.sensors)} sensors, {len(spec.attributes)} attributes"
        )
        return ParseResult(spec=spec, index=index)


def parse_text(text: str, name: str = "<memory>.vspec",
               includes: Optional[Dict[str, str]] = None,
               options: Optional[ParserOptions] = None) -> ParseResult:
    """
    Parses in-memory sources. 'includes' maps include paths (as resolved
    relative to the root name) to their text.
    """
    sources = {os.path.normpath(name): text}
    for path, content in (includes or {}).items():
        sources[os.path.normpath(path)] = content

    def reader(path: str) -> bytes:
        if path not in sources:
            raise FileNotFoundError(2, "No such file or directory", path)
        return sources[path].encode("utf-8")

    return VssPipeline(options=options, reader=reader).run(name)
