"""Build app graphs from Argo CD Application resources."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from driftwatch.core.k8s_client import K8sClient
from driftwatch.models import ArtifactType
from driftwatch.models.app import App, AppArtifact, AppVersion

logger = logging.getLogger(__name__)

ARGO_GROUP = "argoproj.io"
ARGO_VERSION = "v1alpha1"
ARGO_PLURAL = "applications"


class ArgoAppProvider:
    """Lists Argo CD ``Application`` objects and maps each to an ``App``.

    Every call re-reads the cluster; only the live revision is modelled, so
    each app has a single ``AppVersion`` which is also its current one.
    """

    def __init__(self, k8s: K8sClient, namespace: str | None = None):
        self.k8s = k8s
        self.namespace = namespace or None

    def get_all_apps(self) -> list[App]:
        items = self.k8s.list_custom_resources(
            group=ARGO_GROUP,
            version=ARGO_VERSION,
            plural=ARGO_PLURAL,
            namespace=self.namespace,
        )
        apps = [app_from_resource(item) for item in items]
        logger.info("Collected %d Argo CD applications", len(apps))
        return apps


def app_from_resource(resource: dict[str, Any]) -> App:
    metadata = resource.get("metadata") or {}
    spec = resource.get("spec") or {}
    status = resource.get("status") or {}
    name = metadata.get("name", "")
    labels = dict(metadata.get("labels") or {})
    now = datetime.now(timezone.utc)

    first_seen = _parse_timestamp(metadata.get("creationTimestamp"))
    if first_seen is None:
        logger.debug("No creation timestamp on Argo app %s, using now", name)
        first_seen = now

    sources = _sources(spec)
    artifacts: list[AppArtifact] = []
    for source in sources:
        artifact = _source_artifact(source, name)
        if artifact is not None:
            artifacts.append(artifact)
    images = (status.get("summary") or {}).get("images") or []
    for image in images:
        if isinstance(image, str) and image:
            artifacts.append(AppArtifact(source=image, artifact_type=ArtifactType.CONTAINER_IMAGE))

    version = AppVersion(
        version=_app_version(status, sources, name),
        discovered_at=now,
        labels=dict(labels),
        artifacts=artifacts,
    )
    return App(
        id=metadata.get("uid") or name,
        name=name,
        labels=labels,
        first_seen=first_seen,
        last_seen=now,
        current_version=version,
        versions=[version],
    )


def _sources(spec: dict[str, Any]) -> list[dict[str, Any]]:
    if isinstance(spec.get("source"), dict):
        return [spec["source"]]
    return [s for s in spec.get("sources") or [] if isinstance(s, dict)]


def _app_version(status: dict[str, Any], sources: list[dict[str, Any]], name: str) -> str:
    """Synced revision first, then the declared target revision."""
    revision = (status.get("sync") or {}).get("revision")
    if isinstance(revision, str) and revision:
        return revision
    for source in sources[:1]:
        target = source.get("targetRevision")
        if isinstance(target, str) and target:
            if len(sources) > 1:
                logger.debug("Argo app %s has multiple sources, using the first revision", name)
            return target
    return "unknown"


def _source_artifact(source: dict[str, Any], app_name: str) -> AppArtifact | None:
    repo_url = source.get("repoURL")
    chart = source.get("chart")
    path = source.get("path")

    if chart:
        if not repo_url:
            logger.warning("Argo app %s source has 'chart' but no 'repoURL'", app_name)
            return None
        artifact = AppArtifact(source=repo_url, artifact_type=ArtifactType.HELM, artifact_name=chart)
        artifact.add_metadata("chart", chart)
        return artifact
    if repo_url and path:
        artifact = AppArtifact(
            source=f"{repo_url.rstrip('/')}/{path}",
            artifact_type=ArtifactType.GIT,
            artifact_name=path,
        )
        artifact.add_metadata("path", path)
        return artifact

    logger.debug("Argo app %s: cannot classify source %s", app_name, source)
    return None


def _parse_timestamp(raw: Any) -> datetime | None:
    if isinstance(raw, datetime):
        return raw
    if not raw:
        return None
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return None
