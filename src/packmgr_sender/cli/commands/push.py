"""Package delivery command."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ...config import SenderConfig
from ...core.utils.rich_ui import add_result_row, create_results_table
from ...models import DeliveryResult
from ...sender import Sender

console = Console()


def push_command(
    package: str,
    targets: Optional[List[str]] = None,
    packmgr_path: Optional[str] = None,
    check_bundles: Optional[bool] = None,
):
    """Install a package on every target and report per-target results."""

    package_path = Path(package)
    if not package_path.is_file():
        console.print(f"[red]Package not found:[/red] {escape(str(package_path))}")
        raise typer.Exit(1)

    try:
        config = SenderConfig.from_env(
            targets=list(targets) if targets else None,
            packmgr_path=packmgr_path,
            check_bundles=check_bundles,
        )
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  • {location}: {escape(error['msg'])}")
        console.print("Pass targets with --target or set PACKMGR_TARGETS")
        raise typer.Exit(2)

    def on_result(error_message: str, host: str, elapsed_ms: int, timestamp: str):
        if error_message:
            console.print(f"[red]✗[/red] {escape(host)} ({elapsed_ms}ms)")
        else:
            console.print(f"[green]✓[/green] {escape(host)} ({elapsed_ms}ms)")

    sender = Sender(config)
    target_count = len(config.targets)
    with console.status(
        f"Installing {package_path.name} on {target_count} target(s)..."
    ):
        results: List[DeliveryResult] = asyncio.run(
            sender.send(package_path, on_result)
        )

    table = create_results_table()
    for result in results:
        add_result_row(table, result)
    console.print(table)

    failed = [r for r in results if not r.ok]
    if failed:
        console.print(f"\n{len(failed)} of {target_count} target(s) failed")
        raise typer.Exit(1)

    console.print(f"\nInstalled on {target_count} target(s)")
