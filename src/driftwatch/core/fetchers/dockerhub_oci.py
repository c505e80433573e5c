"""Chart versions from Docker Hub OCI registries."""

from __future__ import annotations

import logging
import re

from driftwatch.core.fetchers.base import FetchError, VersionFetcher
from driftwatch.models import ArtifactType
from driftwatch.models.app import AppArtifact

logger = logging.getLogger(__name__)

DOCKERHUB_OCI_PATTERN = re.compile(r"^oci://([^/]+\.docker\.io)/(.+)$")
AUTH_URL = "https://auth.docker.io/token"
AUTH_SERVICE = "registry.docker.io"


class DockerHubOciFetcher(VersionFetcher):
    """Anonymous pull token, then the registry's ``tags/list`` endpoint."""

    name = "dockerhub-oci"

    def supports(self, artifact: AppArtifact) -> bool:
        return (
            artifact.artifact_type is ArtifactType.HELM
            and bool(artifact.source)
            and DOCKERHUB_OCI_PATTERN.match(artifact.source) is not None
        )

    def cache_key(self, artifact: AppArtifact) -> str:
        return artifact.source

    def _fetch_remote(self, artifact: AppArtifact) -> list[str]:
        m = DOCKERHUB_OCI_PATTERN.match(artifact.source)
        if m is None:
            raise FetchError(f"Not a Docker Hub OCI source: {artifact.source}")
        registry_domain, repository_path = m.group(1), m.group(2)

        token = self._pull_token(repository_path)

        tags_url = f"https://{registry_domain}/v2/{repository_path}/tags/list"
        response = self._get(
            tags_url,
            headers={"Accept": "application/json", "Authorization": f"Bearer {token}"},
        )
        payload = self._json(response, tags_url)
        tags = payload.get("tags") if isinstance(payload, dict) else None
        if not isinstance(tags, list):
            logger.warning("No tags listed for %s", artifact.source)
            return []
        return [str(t) for t in tags if t]

    def _pull_token(self, repository_path: str) -> str:
        scope = f"repository:{repository_path}:pull"
        response = self._get(
            AUTH_URL,
            headers={"Accept": "application/json"},
            params={"service": AUTH_SERVICE, "scope": scope},
        )
        payload = self._json(response, AUTH_URL)
        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise FetchError("Empty token received from Docker Hub auth")
        return str(token)
