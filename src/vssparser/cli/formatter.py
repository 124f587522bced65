# src/vssparser/cli/formatter.py
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vssparser.core.errors import VssError
from vssparser.core.models import Attribute, Branch, Sensor
from vssparser.parsing.pipeline import ParseResult


class VssFormatter:
    """
    VssFormatter: The visual heart of the CLI.
    Renders the three sections of a parsed spec and qualified parse errors.
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def _values(self, values: List[str]) -> str:
        if not values:
            return ""
        if len(values) == 1:
            return values[0]
        return ", ".join(values)

    def _datatype(self, obj: Attribute) -> str:
        text = obj.datatype.render()
        if obj.arraysize.is_array:
            text += f"[{obj.arraysize.size if obj.arraysize.size is not None else ''}]"
        return escape(text)

    def _notes(self, obj) -> str:
        """Description and comment folded into one cell."""
        lines = []
        if obj.description:
            lines.append(escape(obj.description))
        if obj.comment:
            lines.append(f"[dim]comment: {escape(obj.comment)}[/dim]")
        return "\n".join(lines)

    def branch_table(self, result: ParseResult, branches: List[Branch]) -> Table:
        table = Table(title="Branches", show_header=True, header_style="bold magenta")
        table.add_column("Path", style="cyan")
        table.add_column("Location", style="dim")
        table.add_column("Aggregate", justify="center")
        table.add_column("Instances")
        table.add_column("Description")

        for branch in branches:
            table.add_row(
                branch.path,
                result.where(branch),
                "yes" if branch.aggregate else "no",
                escape(" ".join(instance.render() for instance in branch.instances)),
                self._notes(branch),
            )
        return table

    def sensor_table(self, result: ParseResult, sensors: List[Sensor]) -> Table:
        table = Table(title="Sensors", show_header=True, header_style="bold magenta")
        table.add_column("Path", style="cyan")
        table.add_column("Type")
        table.add_column("Datatype")
        table.add_column("Unit")
        table.add_column("Min", justify="right")
        table.add_column("Max", justify="right")
        table.add_column("Default")
        table.add_column("Allowed")
        table.add_column("Location", style="dim")

        for sensor in sensors:
            table.add_row(
                sensor.path,
                sensor.type.render(),
                self._datatype(sensor),
                sensor.unit.render(),
                "" if sensor.min is None else str(sensor.min),
                "" if sensor.max is None else str(sensor.max),
                escape(self._values(sensor.default)),
                escape(self._values(sensor.allowed)),
                result.where(sensor),
            )
        return table

    def attribute_table(self, result: ParseResult, attributes: List[Attribute]) -> Table:
        table = Table(title="Attributes", show_header=True, header_style="bold magenta")
        table.add_column("Path", style="cyan")
        table.add_column("Datatype")
        table.add_column("Unit")
        table.add_column("Default")
        table.add_column("Allowed")
        table.add_column("Location", style="dim")

        for attribute in attributes:
            table.add_row(
                attribute.path,
                self._datatype(attribute),
                attribute.unit.render(),
                escape(self._values(attribute.default)),
                escape(self._values(attribute.allowed)),
                result.where(attribute),
            )
        return table

    def render(self, result: ParseResult):
        """Prints the three labeled sections in a fixed order."""
        spec = result.spec
        self.console.print(self.branch_table(result, spec.branches))
        self.console.print(self.sensor_table(result, spec.sensors))
        self.console.print(self.attribute_table(result, spec.attributes))
        self.console.print(
            f"[bold white]{len(spec.branches)}[/bold white] branches, "
            f"[bold white]{len(spec.sensors)}[/bold white] sensors/actuators, "
            f"[bold white]{len(spec.attributes)}[/bold white] attributes"
        )

    def show_error(self, error: VssError):
        """Qualified error with its one-line source excerpt."""
        body = f"[bold red]{type(error).__name__}:[/bold red] {escape(error.message)}"
        if error.where:
            body += f"\n[cyan]at[/cyan] {error.where}"
        if error.excerpt:
            body += f"\n[dim]> {escape(error.excerpt)}[/dim]"
        self.err_console.print(Panel(body, title="Parsing Failed", border_style="red", expand=False))
