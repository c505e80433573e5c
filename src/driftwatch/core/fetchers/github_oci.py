"""Chart versions from GitHub Container Registry packages."""

from __future__ import annotations

import logging
import os
import re
from urllib.parse import quote

from driftwatch.core.fetchers.base import MissingCredentialError, VersionFetcher
from driftwatch.models import ArtifactType
from driftwatch.models.app import AppArtifact

logger = logging.getLogger(__name__)

GITHUB_OCI_PATTERN = re.compile(r"^oci://ghcr\.io/(.+)$")
GITHUB_API = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
MAX_PAGES = 50


def package_versions_url(source: str, artifact_name: str) -> str | None:
    """Build the packages API URL for an ``oci://ghcr.io/<owner>/<path>`` source.

    Returns None when the source has no package path after the owner.
    """
    m = GITHUB_OCI_PATTERN.match(source)
    if not m:
        return None
    parts = m.group(1).strip("/").split("/", 1)
    if len(parts) < 2 or not parts[1]:
        return None
    owner, path = parts
    package = f"{path}/{artifact_name}" if artifact_name else path
    return f"{GITHUB_API}/users/{owner}/packages/container/{quote(package, safe='')}/versions"


class GithubOciFetcher(VersionFetcher):
    """Collects every ``metadata.container.tags`` entry of every package version.

    Needs a token with ``read:packages``; without one the fetch is skipped.
    """

    name = "github-oci"

    def __init__(self, *args, token: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._token = token

    @property
    def token(self) -> str:
        if self._token:
            return self._token
        return os.environ.get("GITHUB_TOKEN", "")

    def supports(self, artifact: AppArtifact) -> bool:
        return (
            artifact.artifact_type is ArtifactType.HELM
            and bool(artifact.source)
            and artifact.source.startswith("oci://ghcr.io/")
        )

    def _fetch_remote(self, artifact: AppArtifact) -> list[str]:
        token = self.token
        if not token:
            raise MissingCredentialError("GITHUB_TOKEN")

        url = package_versions_url(artifact.source, artifact.artifact_name)
        if url is None:
            logger.error("Invalid GitHub OCI source: %s", artifact.source)
            return []

        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        tags: set[str] = set()
        next_url: str | None = url
        params: dict | None = {"per_page": 100}
        pages = 0
        while next_url and pages < MAX_PAGES:
            response = self._get(next_url, headers=headers, params=params)
            tags.update(_container_tags(self._json(response, next_url)))
            next_url = response.links.get("next", {}).get("url")
            # the "next" link already carries the query string
            params = None
            pages += 1
        if next_url:
            logger.warning("Stopped after %d pages for %s, results are truncated", MAX_PAGES, artifact.source)
        if not tags:
            logger.warning("No tags found for %s", artifact.source)
        return sorted(tags)


def _container_tags(payload: object) -> list[str]:
    tags: list[str] = []
    if not isinstance(payload, list):
        return tags
    for version in payload:
        if not isinstance(version, dict):
            continue
        container = (version.get("metadata") or {}).get("container") or {}
        for tag in container.get("tags") or []:
            if tag:
                tags.append(str(tag))
    return tags
