#!/usr/bin/env python3
"""
VSSPARSER CONFIGURATION
-----------------------
Run-time switches shared by the loader, the parser and the CLI.

Author: VssParser Team
Date: 2026-01-16
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserOptions:
    encoding: str = "utf-8-sig"         # Source decoding (BOM tolerated)
    legacy_aggregate: bool = False      # Store 'aggregate:' inverted, as older tooling did
    strict_datatype: bool = True        # Reject sensors/attributes without a datatype
