"""
Rich UI components for logging and result display in packmgr-sender.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from packmgr_sender.models import DeliveryResult


def is_rich_enabled() -> bool:
    """Check if Rich UI logging should be enabled based on environment"""
    return os.environ.get("PACKMGR_RICH_UI", "false").lower() in ("true", "1", "yes")


class RichLoggingFilter(logging.Filter):
    """Filter to suppress verbose third-party logs when Rich UI is active"""

    def filter(self, record):
        # httpx logs every request at INFO
        if record.levelno <= logging.INFO and record.name.startswith(("httpx", "httpcore")):
            return False
        if record.name == "asyncio" and "selector" in record.getMessage().lower():
            return False
        return True


def get_rich_handler(console: Console = None) -> logging.Handler:
    """Get Rich logging handler writing to the given console"""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.addFilter(RichLoggingFilter())
    return handler


def format_result_status(result: DeliveryResult) -> str:
    """Colored status cell for a delivery result"""
    if result.ok:
        return "[green]DEPLOYED[/green]"
    return "[red]FAILED[/red]"


def create_results_table() -> Table:
    """Create the table that delivery results are appended to"""
    table = Table(title="Package Delivery")
    table.add_column("Target", style="cyan", no_wrap=True)
    table.add_column("Status", justify="center")
    table.add_column("Time", justify="right", style="magenta")
    table.add_column("Finished", style="yellow")
    table.add_column("Message")
    return table


def add_result_row(table: Table, result: DeliveryResult) -> None:
    table.add_row(
        escape(result.host),
        format_result_status(result),
        f"{result.elapsed_ms}ms",
        result.timestamp,
        escape(result.error_message) or "-",
        style=None if result.ok else "red",
    )
