"""
Rich console output for docpager.

Colourful logging through ``RichHandler`` and the summary tables printed by
the command-line interface.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .logger import parse_level


def setup_logging(level: str = "INFO", use_rich: bool = True, console: Optional[Console] = None) -> None:
    """
    Setup logging for the application.

    Args:
        level: Log level
        use_rich: Whether to log through rich (plain stream logging otherwise)
        console: Console to log to (stderr console by default)
    """
    numeric_level = parse_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if use_rich:
        rich_handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
        root_logger.addHandler(rich_handler)
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(handler)


class ConsoleReporter:
    """Prints pagination summaries to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")

    def failure(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def table(self, title: str, data: Dict[str, Any]) -> None:
        """Display key/value data in a two-column table."""
        table = Table(title=title)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="magenta")
        for key, value in data.items():
            table.add_row(str(key), str(value))
        self.console.print(table)

    def pages(self, title: str, rows: Sequence[Dict[str, Any]]) -> None:
        """Display one row per page: caption, kind, block count and decorations."""
        table = Table(title=title)
        table.add_column("Page", style="cyan")
        table.add_column("Kind")
        table.add_column("Blocks", justify="right")
        table.add_column("Decorations", style="magenta")
        for row in rows:
            table.add_row(
                str(row["caption"]),
                str(row["kind"]),
                str(row["blocks"]),
                ", ".join(row["decorations"]) or "-",
            )
        self.console.print(table)
