"""Chart versions from a classic Helm HTTP repository index."""

from __future__ import annotations

import logging

import yaml

from driftwatch.core.fetchers.base import MalformedPayloadError, VersionFetcher
from driftwatch.models import ArtifactType
from driftwatch.models.app import AppArtifact

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available (~10x faster).
# BaseLoader keeps every scalar a string, so `version: 1.10` is not read as 1.1.
_YamlLoader = getattr(yaml, "CBaseLoader", yaml.BaseLoader)


def index_url(repo_url: str) -> str:
    return repo_url.rstrip("/") + "/index.yaml"


class HelmHttpFetcher(VersionFetcher):
    """Reads ``{repo}/index.yaml`` and collects ``entries[chart][].version``."""

    name = "helm-http"

    def supports(self, artifact: AppArtifact) -> bool:
        return (
            artifact.artifact_type is ArtifactType.HELM
            and bool(artifact.source)
            and not artifact.source.startswith("oci://")
        )

    def _fetch_remote(self, artifact: AppArtifact) -> list[str]:
        url = index_url(artifact.source)
        response = self._get(url, headers={"Accept": "application/yaml, text/yaml, */*"})
        try:
            data = yaml.load(response.text, Loader=_YamlLoader)
        except yaml.YAMLError as e:
            raise MalformedPayloadError(url, "YAML", e) from e
        return _chart_versions(data, artifact.artifact_name, url)


def _chart_versions(data: object, chart_name: str, url: str) -> list[str]:
    """Pull the version strings of one chart out of a parsed index.

    Every structural gap yields an empty list rather than an error.
    """
    if not isinstance(data, dict) or "entries" not in data:
        logger.warning("Index %s has no 'entries'", url)
        return []
    entries = data["entries"]
    if not isinstance(entries, dict):
        logger.warning("'entries' in %s is not a mapping", url)
        return []
    chart_entries = entries.get(chart_name)
    if chart_entries is None:
        logger.warning("Chart '%s' not found in %s", chart_name, url)
        return []
    if not isinstance(chart_entries, list):
        logger.warning("Chart entry for '%s' in %s is not a list", chart_name, url)
        return []

    versions = [
        str(e["version"])
        for e in chart_entries
        if isinstance(e, dict) and e.get("version")
    ]
    if not versions:
        logger.info("No versions listed for chart '%s' in %s", chart_name, url)
    return versions
