# wp_move/cli/utils/output.py
"""Output formatting utilities"""

from typing import Optional, List, Dict, Any, Tuple

from rich.table import Table
from rich.markup import escape
from rich.panel import Panel
from rich import box

from ...api.exceptions import WpMoveError
from ...constants import EMOJI_SUCCESS, EMOJI_ERROR, EMOJI_WARNING
from ...models import EnvironmentConfig, OperationResult, OperationStatus
from ...utils.formatting import format_duration
from ...utils.output import console

_STATUS_STYLES = {
    OperationStatus.SUCCESS: ("green", EMOJI_SUCCESS),
    OperationStatus.SKIPPED: ("yellow", EMOJI_WARNING),
    OperationStatus.IN_PROGRESS: ("blue", "…"),
}


def format_operation_result(result: OperationResult) -> None:
    """Format and display a push, pull, dump or test result"""
    color, mark = _STATUS_STYLES[result.status]
    title = f"{result.operation.capitalize()} Result"
    if result.dry_run:
        title += " (dry run)"

    lines = [
        f"[{color}]{mark}[/{color}] {escape(result.message or result.status.value)}",
        "",
        f"[bold]Environment:[/bold] {result.environment}",
    ]

    if result.steps:
        lines.append("")
        lines.append("[bold]Steps:[/bold]")
        for label in result.steps:
            lines.append(f"  • {escape(label)}")

    if result.artifacts:
        lines.append("")
        lines.append("[bold]Dump files:[/bold]")
        for artifact in result.artifacts:
            lines.append(f"  • {escape(artifact)}")

    if result.warnings:
        lines.append("")
        lines.append("[bold yellow]Warnings:[/bold yellow]")
        for message in result.warnings:
            lines.append(f"  [yellow]• {escape(message)}[/yellow]")

    lines.append("")
    lines.append(f"[dim]Duration: {format_duration(result.duration)}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title=title,
        border_style=color
    )
    console.print(panel)


def format_error(error: WpMoveError) -> None:
    """Format and display an operation error"""
    title = "Error"
    if error.error_code:
        title = f"Error [{error.error_code}]"

    panel = Panel(
        f"[red]{EMOJI_ERROR}[/red] {escape(str(error))}",
        title=title,
        border_style="red"
    )
    console.print(panel)


def format_environments(environments: List[EnvironmentConfig]) -> None:
    """Format and display configured environments"""
    if not environments:
        console.print("[yellow]No environments found[/yellow]")
        return

    rows = []
    for env in environments:
        rows.append({
            "name": env.name,
            "transport": "ssh" if env.is_remote else "local",
            "location": env.get_display_info(),
            "vhost": env.vhost,
            "not_push": ", ".join(sorted(env.not_push)) or "-",
        })

    table = format_table(
        rows,
        [
            ("name", "Environment"),
            ("transport", "Transport"),
            ("location", "WordPress Path"),
            ("vhost", "URL"),
            ("not_push", "Never Pushed"),
        ],
        title="Environments",
    )
    console.print(table)


def format_table(data: List[Dict[str, Any]],
                 columns: List[Tuple[str, str]],
                 title: Optional[str] = None) -> Table:
    """Create a formatted table

    Args:
        data: List of dictionaries with data
        columns: List of (key, header) tuples
        title: Optional table title

    Returns:
        Rich Table object
    """
    table = Table(title=title, box=box.ROUNDED)

    # Add columns
    for key, header in columns:
        table.add_column(header, style="cyan" if key == "name" else None)

    # Add rows
    for item in data:
        row = []
        for key, _ in columns:
            value = item.get(key, "")
            if isinstance(value, (int, float)):
                value = str(value)
            row.append(value)
        table.add_row(*row)

    return table
