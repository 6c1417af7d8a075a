#!/usr/bin/env python3
"""
UI components for the heightmap_stl command line.

This module provides the shared rich console, message helpers and logging
setup used by every command.
"""

import logging
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

logger = logging.getLogger(__name__)

# Create a custom theme
cli_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "path": "blue",
    "value": "green",
    "key": "cyan",
})

console = Console(theme=cli_theme)
error_console = Console(theme=cli_theme, stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """
    Route library logging through rich.

    Args:
        verbose: Log DEBUG and above instead of WARNING and above
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def print_properties(properties: Dict[str, Any], title: str) -> None:
    """Print a two-column property/value table."""
    table = Table(title=title)
    table.add_column("Property", style="key", no_wrap=True)
    table.add_column("Value", style="value")

    for key, value in properties.items():
        if isinstance(value, float):
            formatted_value = f"{value:.6g}"
        else:
            formatted_value = str(value)
        table.add_row(str(key), formatted_value)

    console.print(table)


def print_warning(message: str) -> None:
    """
    Print a warning message.

    Args:
        message: Warning message text
    """
    console.print(f"[warning]Warning:[/warning] {escape(message)}")


def print_error(message: str) -> None:
    """
    Print an error message.

    Args:
        message: Error message text
    """
    console.print(f"[error]Error:[/error] {escape(message)}")


def print_success(message: str) -> None:
    """
    Print a success message.

    Args:
        message: Success message text
    """
    console.print(f"[success]{escape(message)}[/success]")
