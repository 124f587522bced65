#!/usr/bin/env python3
"""
VSSPARSER CLI
-------------
Command-line front end: parse one root .vspec file (and everything it
includes), then render the result as rich tables, YAML or JSON.

Exit status is 0 on success and 1 on any load or parse failure; argparse
itself exits with 2 on a bad command line.

Author: VssParser Team
Date: 2026-01-16
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from vssparser.cli.formatter import VssFormatter
from vssparser.core.config import ParserOptions
from vssparser.core.errors import VssError
from vssparser.export.exporter import SpecExporter
from vssparser.parsing.pipeline import VssPipeline

__version__ = "0.1.0"

# Global consoles for consistent styling across the application
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("vssparser.cli")


class VssParserCLI:
    """
    CLI wrapper that translates user commands into pipeline runs.
    """

    def __init__(self, out: Optional[Console] = None, err: Optional[Console] = None):
        self.out = out or console
        self.err = err or err_console
        self.formatter = VssFormatter(console=self.out, err_console=self.err)
        self.parser = argparse.ArgumentParser(
            prog="vssparser",
            description="VssParser - Vehicle Signal Specification (.vspec) parser",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags."""
        self.parser.add_argument("file", help="Root .vspec file (includes are resolved relative to it)")
        self.parser.add_argument("--format", choices=("text", "yaml", "json"), default="text",
                                 help="Output format (default: text)")
        self.parser.add_argument("--legacy-aggregate", action="store_true",
                                 help="Store 'aggregate:' inverted, as older tooling did")
        self.parser.add_argument("--allow-missing-datatype", action="store_true",
                                 help="Accept sensors/attributes that declare no datatype")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
        self.parser.add_argument("--version", action="version", version=f"vssparser v{__version__}")

    def _setup_logging(self, verbose: bool):
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(message)s",
            handlers=[RichHandler(console=self.err, show_path=False)],
            force=True,
        )

    def print_header(self, filename: str):
        self.err.print(Panel.fit(
            f"[bold cyan]VssParser v{__version__}[/bold cyan]\n[white]{filename}[/white]",
            border_style="cyan",
        ))

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit status."""
        args = self.parser.parse_args(argv)
        self._setup_logging(args.verbose)

        options = ParserOptions(
            legacy_aggregate=args.legacy_aggregate,
            strict_datatype=not args.allow_missing_datatype,
        )
        logger.debug(f"Parsing {args.file} with {options}")

        if args.format == "text":
            self.print_header(args.file)

        try:
            result = VssPipeline(options).run(args.file)
        except VssError as e:
            self.formatter.show_error(e)
            return 1

        if args.format == "yaml":
            self.out.print(SpecExporter().to_yaml(result), end="", markup=False, highlight=False, emoji=False, soft_wrap=True)
        elif args.format == "json":
            self.out.print(SpecExporter().to_json(result), markup=False, highlight=False, emoji=False, soft_wrap=True)
        else:
            self.formatter.render(result)
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(VssParserCLI().run())
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
