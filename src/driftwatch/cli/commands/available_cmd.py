"""dwatch available - Show what each registry offers."""

from __future__ import annotations

from typing import Optional

import typer

from driftwatch.cli.options import ContextOption, InventoryOption, LogLevelOption, NamespaceOption, OutputOption
from driftwatch.cli.runtime import build_service, fail
from driftwatch.core.app_provider import InventoryError
from driftwatch.output.formatters import output_available

app = typer.Typer()


@app.callback(invoke_without_command=True)
def available(
    output: str = OutputOption,
    inventory: Optional[str] = InventoryOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    log_level: Optional[str] = LogLevelOption,
) -> None:
    """List available versions for every artifact of every app revision.

    Fetch failures are shown per artifact instead of aborting the listing.
    """
    service = build_service(inventory, context, namespace, log_level)
    try:
        versions = service.get_available_versions()
    except InventoryError as e:
        fail(str(e))
    output_available(versions, output)
