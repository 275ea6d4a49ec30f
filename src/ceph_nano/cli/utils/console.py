# -*- coding: utf-8 -*-
"""Console output utilities for CLI using Rich library."""

import io
import json
from typing import Any, Optional

from rich.console import Console
from rich.json import JSON
from rich.table import Table


# Centralized style configuration
CONSOLE_CONFIG = {
    "success": {
        "emoji": "✓",
        "style": "bold green",
    },
    "error": {
        "emoji": "✗",
        "style": "bold red",
    },
    "info": {
        "emoji": "ℹ",
        "style": "bold blue",
    },
}

# Module-level console instances (lazy initialization)
_console = None
_err_console = None


def _get_console() -> Console:
    """Get or create the shared console instance for stdout."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def _get_err_console() -> Console:
    """Get or create the shared console instance for stderr."""
    global _err_console
    if _err_console is None:
        _err_console = Console(stderr=True)
    return _err_console


def _echo(kind: str, message: str, console: Console, **kwargs) -> None:
    config = CONSOLE_CONFIG[kind]
    end = "\n" if kwargs.pop("nl", True) else ""
    console.print(
        f"{config['emoji']} {message}",
        style=config["style"],
        end=end,
        **kwargs,
    )


def echo_success(message: str, **kwargs) -> None:
    """
    Print success message in green with checkmark.

    Example:
        >>> echo_success("Cluster mycluster is running")
        ✓ Cluster mycluster is running
    """
    _echo("success", message, _get_console(), **kwargs)


def echo_error(message: str, **kwargs) -> None:
    """Print error message in red with X mark to stderr."""
    _echo("error", message, _get_err_console(), **kwargs)


def echo_info(message: str, **kwargs) -> None:
    """Print info message in blue with info symbol."""
    _echo("info", message, _get_console(), **kwargs)


def echo_plain(message: str, err: bool = False, nl: bool = True) -> None:
    """
    Print text verbatim, without markup or highlighting.

    Container logs and status lines go through here so brackets in them are
    not taken as Rich markup.
    """
    console = _get_err_console() if err else _get_console()
    console.print(
        message,
        markup=False,
        highlight=False,
        soft_wrap=True,
        end="\n" if nl else "",
    )


def _render(renderable) -> str:
    string_io = io.StringIO()
    temp_console = Console(file=string_io, force_terminal=True)
    temp_console.print(renderable)
    return string_io.getvalue()


def format_table(
    headers: list,
    rows: list,
    max_width: Optional[int] = None,
) -> str:
    """
    Format data as a Rich Table (returns rendered string).

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of cell values
        max_width: Optional maximum width for columns

    Returns:
        Rendered table as a string

    Example:
        >>> headers = ["NAME", "STATUS"]
        >>> rows = [["mycluster", "running"], ["other", "exited"]]
        >>> print(format_table(headers, rows))
    """
    if not rows:
        return "No data to display."

    table = Table(show_header=True, header_style="bold cyan")

    for header in headers:
        table.add_column(header, max_width=max_width)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    return _render(table)


def format_json(data: Any, indent: int = 2) -> str:
    """
    Format data as JSON with syntax highlighting.

    Args:
        data: Data to format as JSON
        indent: Indentation level (default: 2)

    Returns:
        Rendered JSON as a string with syntax highlighting
    """
    # Rich's JSON requires a string, not an object
    json_string = json.dumps(data, indent=indent, default=str)
    return _render(JSON(json_string, indent=indent))


def format_status_report(report: dict) -> str:
    """
    Format a cluster status report as a key/value Rich Table.

    Args:
        report: Dictionary of a StatusReport

    Returns:
        Rendered report as a string
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan")
    table.add_column("Value", style="white")

    table.add_row("Cluster", report["cluster"])
    table.add_row("Ceph health", report["health"])
    table.add_row("S3 endpoint", report["endpoint"])
    table.add_row("S3 user", report["user"])
    table.add_row("S3 access key", report["access_key"])
    table.add_row("S3 secret key", report["secret_key"])
    table.add_row("Working directory", report["working_directory"])

    return _render(table)
