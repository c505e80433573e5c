"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
NamespaceOption = typer.Option(None, "--namespace", "-n", help="Argo CD namespace (default: all)")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
InventoryOption = typer.Option(
    None, "--inventory", "-i", help="YAML inventory of apps (default: Argo CD applications)",
)
LogLevelOption = typer.Option(None, "--log-level", help="Log level: DEBUG, INFO, WARNING, ERROR")
