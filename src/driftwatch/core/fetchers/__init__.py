"""Registry version fetchers and their dispatch order."""

from __future__ import annotations

from typing import Sequence

import requests
from requests.adapters import HTTPAdapter

from driftwatch.config.settings import Settings
from driftwatch.core.fetch_cache import FetchCache
from driftwatch.core.fetchers.base import (
    FetchError,
    MalformedPayloadError,
    MissingCredentialError,
    RegistryStatusError,
    TransportError,
    VersionFetcher,
)
from driftwatch.core.fetchers.dockerhub_oci import DockerHubOciFetcher
from driftwatch.core.fetchers.github_oci import GithubOciFetcher
from driftwatch.core.fetchers.helm_http import HelmHttpFetcher
from driftwatch.models.app import AppArtifact

__all__ = [
    "DockerHubOciFetcher",
    "FetchError",
    "GithubOciFetcher",
    "HelmHttpFetcher",
    "MalformedPayloadError",
    "MissingCredentialError",
    "RegistryStatusError",
    "TransportError",
    "VersionFetcher",
    "build_session",
    "default_fetchers",
    "select_fetcher",
]


def build_session(pool_size: int = 10) -> requests.Session:
    """One pooled session shared by every fetcher and worker thread."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers["User-Agent"] = "driftwatch"
    return session


def default_fetchers(
    settings: Settings,
    session: requests.Session | None = None,
) -> tuple[VersionFetcher, ...]:
    """Fetchers in probe order.

    The OCI variants come first so that ``oci://`` sources never fall
    through to the plain HTTP index fetcher.
    """
    session = session or build_session(settings.worker_count)

    def cache() -> FetchCache:
        return FetchCache(settings.fetch_cache_size, settings.fetch_cache_ttl_seconds)

    timeout = settings.http_timeout
    return (
        DockerHubOciFetcher(session, cache(), timeout),
        GithubOciFetcher(session, cache(), timeout, token=settings.github_token or None),
        HelmHttpFetcher(session, cache(), timeout),
    )


def select_fetcher(fetchers: Sequence[VersionFetcher], artifact: AppArtifact) -> VersionFetcher | None:
    """First fetcher that supports *artifact*, or None."""
    for fetcher in fetchers:
        if fetcher.supports(artifact):
            return fetcher
    return None
