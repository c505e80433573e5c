"""dwatch check-version - Analyze a version against candidates offline."""

from __future__ import annotations

from typing import List

import typer

from driftwatch.cli.options import OutputOption
from driftwatch.cli.runtime import fail
from driftwatch.core.version_analyzer import analyze
from driftwatch.output.formatters import output_analysis
from driftwatch.utils.version_compare import parse_version

app = typer.Typer()


@app.callback(invoke_without_command=True)
def check_version(
    current: str = typer.Argument(help="Deployed version"),
    candidates: List[str] = typer.Argument(help="Available versions"),
    output: str = OutputOption,
) -> None:
    """Show how CURRENT compares to the CANDIDATE versions."""
    if parse_version(current) is None:
        fail(f"'{current}' is not a recognizable version")
    output_analysis(analyze(current, candidates), output)
