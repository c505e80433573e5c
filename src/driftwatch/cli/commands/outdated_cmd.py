"""dwatch outdated - List artifacts that lag behind their registries."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from driftwatch.cli.options import ContextOption, InventoryOption, LogLevelOption, NamespaceOption, OutputOption
from driftwatch.cli.runtime import build_service, fail
from driftwatch.core.app_provider import InventoryError
from driftwatch.output.formatters import output_outdated

app = typer.Typer()
console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def outdated(
    output: str = OutputOption,
    inventory: Optional[str] = InventoryOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    log_level: Optional[str] = LogLevelOption,
) -> None:
    """Check every deployed artifact against its registry."""
    service = build_service(inventory, context, namespace, log_level)

    with console.status("[bold cyan]Collecting apps…") as status:

        def on_progress(i: int, total: int, source: str) -> None:
            status.update(f"[bold cyan]Checking artifacts… [dim]({i}/{total})[/dim] {source}")

        try:
            results = service.get_outdated_artifacts(on_progress=on_progress)
        except InventoryError as e:
            fail(str(e))

    output_outdated(results, output)
