"""Rich table builders for each command."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table

from driftwatch.core.outdated_service import ERROR_SUFFIX
from driftwatch.core.version_analyzer import VersionAnalysis
from driftwatch.models.app import AppArtifact
from driftwatch.models.outdated import OutdatedArtifactInfo
from driftwatch.output.themes import styled_artifact_type, styled_update
from driftwatch.utils.version_compare import classify_update


def _opt(value: object) -> str:
    return "-" if value is None else str(value)


def outdated_table(infos: list[OutdatedArtifactInfo]) -> Table:
    table = Table(title="Outdated Artifacts", expand=True)
    table.add_column("App", style="bold white", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Artifact", style="dim", max_width=50)
    table.add_column("Current", style="dim")
    table.add_column("Latest GA", style="bold")
    table.add_column("Latest Pre", style="dim")
    table.add_column("Next Minor")
    table.add_column("Next Major")
    table.add_column("Δ Major", justify="right")
    table.add_column("Δ Minor", justify="right")
    table.add_column("Update", no_wrap=True)

    for i in sorted(infos, key=lambda i: (i.app_name, i.artifact_source)):
        target = i.latest_ga_release or i.latest_overall_version or ""
        table.add_row(
            i.app_name,
            styled_artifact_type(i.artifact_type),
            i.artifact_source,
            i.current_artifact_version,
            _opt(i.latest_ga_release),
            _opt(i.latest_pre_release),
            _opt(i.next_minor_version),
            _opt(i.next_major_version),
            _opt(i.major_version_delta),
            _opt(i.minor_version_delta),
            styled_update(classify_update(i.current_artifact_version, target)),
        )
    return table


def available_table(versions: dict[str, list[str]], limit: int = 5) -> Table:
    table = Table(title="Available Versions", expand=True)
    table.add_column("App", style="bold white", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Source", style="dim", max_width=50)
    table.add_column("Count", justify="right")
    table.add_column("Newest")

    for key, values in versions.items():
        failed = key.endswith(ERROR_SUFFIX)
        if failed:
            key = key[: -len(ERROR_SUFFIX)]
        app_name, artifact_type, source = key.split("::", 2)
        if failed:
            newest = f"[red]{values[0] if values else 'error'}[/red]"
            count = "-"
        else:
            shown = ", ".join(values[:limit])
            newest = shown + (" …" if len(values) > limit else "") if values else "[dim](none)[/dim]"
            count = str(len(values))
        table.add_row(app_name, styled_artifact_type(artifact_type), source, count, newest)
    return table


def artifacts_table(artifacts: list[AppArtifact]) -> Table:
    table = Table(title="Tracked Artifacts", expand=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Source", style="bold white")
    table.add_column("Name", style="magenta")
    table.add_column("Discovered", style="dim", no_wrap=True)

    for a in artifacts:
        table.add_row(
            styled_artifact_type(a.artifact_type.value),
            a.source,
            a.artifact_name or "-",
            a.discovered_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    return table


def analysis_panel(analysis: VersionAnalysis) -> Panel:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")

    target = analysis.latest_ga_release or analysis.latest_overall_version or ""
    table.add_row("Current", analysis.current_version)
    table.add_row("Outdated", "[red]yes[/red]" if analysis.outdated else "[green]no[/green]")
    table.add_row("Update", styled_update(classify_update(analysis.current_version, target)))
    table.add_row("Latest", _opt(analysis.latest_overall_version))
    table.add_row("Latest GA", _opt(analysis.latest_ga_release))
    table.add_row("Latest Pre-release", _opt(analysis.latest_pre_release))
    table.add_row("Next Minor", _opt(analysis.next_minor_version))
    table.add_row("Next Major", _opt(analysis.next_major_version))
    table.add_row("Major Delta", _opt(analysis.major_version_delta))
    table.add_row("Minor Delta", _opt(analysis.minor_version_delta))
    table.add_row("Candidates", ", ".join(analysis.available_versions) or "-")

    return Panel(table, title=f"[bold]Version: {analysis.current_version}[/bold]", border_style="blue")
