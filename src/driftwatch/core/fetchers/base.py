"""Shared plumbing for registry version fetchers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from driftwatch.core.fetch_cache import FetchCache
from driftwatch.models.app import AppArtifact
from driftwatch.utils.version_compare import sort_versions_desc

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = (10.0, 15.0)


class FetchError(Exception):
    """A fetch could not determine the published versions."""


class TransportError(FetchError):
    def __init__(self, url: str, cause: Exception):
        super().__init__(f"Failed to send request to {url}: {cause}")
        self.url = url


class RegistryStatusError(FetchError):
    def __init__(self, url: str, status_code: int):
        super().__init__(f"Failed to fetch {url}. HTTP status: {status_code}")
        self.url = url
        self.status_code = status_code


class MalformedPayloadError(FetchError):
    def __init__(self, url: str, kind: str, cause: Exception):
        super().__init__(f"Failed to parse {kind} from {url}: {cause}")
        self.url = url


class MissingCredentialError(FetchError):
    """Raised inside a fetcher when a required credential is absent."""

    def __init__(self, credential: str):
        super().__init__(f"{credential} is not set")
        self.credential = credential


class VersionFetcher(ABC):
    """Resolve the published version tags of one kind of artifact.

    ``fetch`` returns a newest-first list of canonical version strings. An
    empty list means the registry was reachable but had nothing for the
    artifact; hard failures raise a ``FetchError`` subclass.
    """

    name = "base"

    def __init__(
        self,
        session: requests.Session | None = None,
        cache: FetchCache | None = None,
        timeout: tuple[float, float] = DEFAULT_TIMEOUT,
    ):
        self.session = session or requests.Session()
        self.cache = cache or FetchCache()
        self.timeout = timeout

    @abstractmethod
    def supports(self, artifact: AppArtifact) -> bool:
        """True if this fetcher knows how to resolve *artifact*."""

    @abstractmethod
    def _fetch_remote(self, artifact: AppArtifact) -> list[str]:
        """Return the raw, unsorted tags the registry reports."""

    def cache_key(self, artifact: AppArtifact) -> str:
        return artifact.identity

    def fetch(self, artifact: AppArtifact) -> list[str]:
        if not self.supports(artifact):
            logger.warning("%s does not support artifact %s", self.name, artifact.source)
            return []

        key = self.cache_key(artifact)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Returning cached versions for %s", key)
            return cached

        try:
            raw = self._fetch_remote(artifact)
        except MissingCredentialError as e:
            # Not cached: the credential may be supplied later.
            logger.warning("Skipping %s with %s: %s", artifact.source, self.name, e)
            return []

        versions = sort_versions_desc(raw)
        logger.info("Found %d versions for %s using %s", len(versions), artifact.source, self.name)
        self.cache.put(key, versions)
        return versions

    # -- HTTP helpers --------------------------------------------------------

    def _get(self, url: str, headers: dict[str, str] | None = None, **kwargs: Any) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(url, e) from e
        if response.status_code != 200:
            logger.debug("GET %s returned %s: %s", url, response.status_code, response.text[:200])
            raise RegistryStatusError(url, response.status_code)
        return response

    @staticmethod
    def _json(response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayloadError(url, "JSON", e) from e
