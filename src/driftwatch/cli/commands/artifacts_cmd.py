"""dwatch artifacts - List artifacts seen during a refresh pass."""

from __future__ import annotations

from typing import Optional

import typer

from driftwatch.cli.options import ContextOption, InventoryOption, LogLevelOption, NamespaceOption, OutputOption
from driftwatch.cli.runtime import build_service, fail
from driftwatch.core.app_provider import InventoryError
from driftwatch.output.formatters import output_artifacts

app = typer.Typer()


@app.callback(invoke_without_command=True)
def artifacts(
    output: str = OutputOption,
    inventory: Optional[str] = InventoryOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    log_level: Optional[str] = LogLevelOption,
) -> None:
    """Run one refresh pass and list every artifact it tracked."""
    service = build_service(inventory, context, namespace, log_level)
    try:
        service.refresh_all()
    except InventoryError as e:
        fail(str(e))
    output_artifacts(service.get_tracked_artifacts(), output)
