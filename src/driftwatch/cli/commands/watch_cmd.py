"""dwatch watch - Keep refreshing until interrupted."""

from __future__ import annotations

import time
from typing import Optional

import typer
from rich.console import Console

from driftwatch.cli.options import ContextOption, InventoryOption, LogLevelOption, NamespaceOption, OutputOption
from driftwatch.cli.runtime import build_service, fail
from driftwatch.core.app_provider import InventoryError
from driftwatch.output.formatters import output_outdated

app = typer.Typer()
console = Console(stderr=True)


def _wait_until_interrupted() -> None:
    while True:
        time.sleep(1)


@app.callback(invoke_without_command=True)
def watch(
    output: str = OutputOption,
    inventory: Optional[str] = InventoryOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    log_level: Optional[str] = LogLevelOption,
    interval: Optional[float] = typer.Option(
        None, "--interval", help="Seconds between refresh passes (default: settings)", show_default=False,
    ),
) -> None:
    """Run the startup hooks, then refresh on a fixed delay until Ctrl-C."""
    if interval is not None and interval <= 0:
        fail("--interval must be positive")
    overrides = {"refresh_interval_seconds": interval} if interval else {}
    service = build_service(inventory, context, namespace, log_level, **overrides)

    try:
        service.on_startup()
        output_outdated(service.get_outdated_artifacts(), output)
    except InventoryError as e:
        fail(str(e))

    service.start(on_refresh=lambda results: output_outdated(results, output))
    console.print(
        f"[dim]Refreshing every {service.settings.refresh_interval_seconds:g}s, press Ctrl-C to stop[/dim]"
    )
    try:
        _wait_until_interrupted()
    except KeyboardInterrupt:
        console.print("[dim]Stopping…[/dim]")
    finally:
        service.stop()
