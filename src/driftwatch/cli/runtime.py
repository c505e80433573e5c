"""Wire providers, fetchers and the service for a CLI invocation."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

import typer

from driftwatch.config.logging_setup import configure_logging
from driftwatch.config.settings import Settings, settings
from driftwatch.core.app_provider import AppProvider, InventoryAppProvider
from driftwatch.core.fetchers import default_fetchers
from driftwatch.core.outdated_service import OutdatedArtifactsService


def build_provider(
    inventory: Optional[str],
    context: Optional[str],
    namespace: Optional[str],
    cfg: Settings = settings,
) -> AppProvider:
    path = inventory or cfg.inventory_file
    if path:
        return InventoryAppProvider(path)

    from driftwatch.core.argo_provider import ArgoAppProvider
    from driftwatch.core.k8s_client import K8sClient

    return ArgoAppProvider(K8sClient(context=context), namespace=namespace or cfg.argo_namespace)


def build_service(
    inventory: Optional[str],
    context: Optional[str],
    namespace: Optional[str],
    log_level: Optional[str],
    **overrides,
) -> OutdatedArtifactsService:
    """Configure logging and return a service over the selected provider.

    Keyword *overrides* replace fields of the global settings for this run.
    """
    cfg = replace(settings, **overrides) if overrides else settings
    configure_logging(log_level or cfg.log_level)
    provider = build_provider(inventory, context, namespace, cfg)
    return OutdatedArtifactsService(provider, default_fetchers(cfg), cfg)


def fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)
