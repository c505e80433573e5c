"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import yaml
from rich.console import Console

from driftwatch.core.version_analyzer import VersionAnalysis
from driftwatch.models.app import AppArtifact
from driftwatch.models.outdated import OutdatedArtifactInfo

console = Console()


def _emit(data: Any, fmt: str) -> bool:
    """Print *data* as JSON or YAML; False when *fmt* asks for a table."""
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2, default=str))
    elif fmt == "yaml":
        console.print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    else:
        return False
    return True


def output_outdated(infos: list[OutdatedArtifactInfo], fmt: str) -> None:
    if _emit([i.to_dict() for i in infos], fmt):
        return
    if not infos:
        console.print("[green]All artifacts are up to date[/green]")
        return
    from driftwatch.output.tables import outdated_table
    console.print(outdated_table(infos))
    console.print(f"\n[yellow]{len(infos)} outdated artifact(s)[/yellow]")


def output_available(versions: dict[str, list[str]], fmt: str) -> None:
    if _emit(versions, fmt):
        return
    if not versions:
        console.print("[dim]No artifacts with a supported registry found.[/dim]")
        return
    from driftwatch.output.tables import available_table
    console.print(available_table(versions))


def output_artifacts(artifacts: list[AppArtifact], fmt: str) -> None:
    if _emit([a.to_dict() for a in artifacts], fmt):
        return
    if not artifacts:
        console.print("[dim]No artifacts tracked.[/dim]")
        return
    from driftwatch.output.tables import artifacts_table
    console.print(artifacts_table(artifacts))


def output_analysis(analysis: VersionAnalysis, fmt: str) -> None:
    if _emit(asdict(analysis), fmt):
        return
    from driftwatch.output.tables import analysis_panel
    console.print(analysis_panel(analysis))
