"""Compare deployed artifact versions against their registries."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from driftwatch.config.settings import Settings
from driftwatch.core.app_provider import AppProvider
from driftwatch.core.fetchers import FetchError, VersionFetcher, select_fetcher
from driftwatch.core.result_store import ArtifactRepository, ArtifactStore, OutdatedResultStore, ResultStore
from driftwatch.core.scheduler import PeriodicRefresher
from driftwatch.core.version_analyzer import analyze
from driftwatch.models import ArtifactType
from driftwatch.models.app import App, AppArtifact, AppVersion
from driftwatch.models.outdated import OutdatedArtifactInfo
from driftwatch.utils.version_compare import normalize_version

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]
Clock = Callable[[], datetime]

ERROR_SUFFIX = "::ERROR"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def image_tag(reference: str) -> str | None:
    """Tag of a container image reference, or None for digest-only references.

    ``registry:5000/app`` has no tag: the port colon sits before a slash.
    """
    name, _, digest = reference.partition("@")
    last_segment = name.rsplit("/", 1)[-1]
    if ":" not in last_segment:
        if digest:
            logger.debug("Image %s is pinned by digest %s", reference, digest)
        return None
    tag = last_segment.rsplit(":", 1)[1]
    return tag or None


def determine_current_version(artifact: AppArtifact, app_version: AppVersion) -> str | None:
    """The deployed version of *artifact*, normalized when it parses as semver.

    Helm and Git artifacts carry the owning revision's version; container
    images carry their tag. Unparseable tags are returned unchanged.
    """
    if artifact.artifact_type in (ArtifactType.HELM, ArtifactType.GIT):
        raw = app_version.version
    elif artifact.artifact_type is ArtifactType.CONTAINER_IMAGE:
        raw = image_tag(artifact.source)
    else:
        return None
    if not raw or raw.lower() == "unknown":
        return None
    return normalize_version(raw) or raw


class OutdatedArtifactsService:
    """Owns the fetchers, worker pool, result store and refresh timer."""

    def __init__(
        self,
        provider: AppProvider,
        fetchers: Sequence[VersionFetcher],
        settings: Settings,
        result_store: ResultStore | None = None,
        artifact_store: ArtifactRepository | None = None,
        clock: Clock = _utcnow,
    ):
        self.provider = provider
        self.fetchers = tuple(fetchers)
        self.settings = settings
        self.result_store = result_store if result_store is not None else OutdatedResultStore()
        self.artifact_store = artifact_store if artifact_store is not None else ArtifactStore()
        self.clock = clock
        self._refresher: PeriodicRefresher | None = None
        logger.debug("OutdatedArtifactsService initialized with %d version fetchers", len(self.fetchers))

    # -- lifecycle -----------------------------------------------------------

    def on_startup(self) -> None:
        if self.settings.collect_on_startup:
            logger.info("Collecting available versions for all artifacts on startup")
            self.get_available_versions()
        if self.settings.refresh_on_startup:
            logger.info("Refreshing outdated artifacts on startup")
            self.refresh_all()

    def start(self, on_refresh: Callable[[list[OutdatedArtifactInfo]], object] | None = None) -> None:
        """Begin periodic refreshes; the first one runs after one interval.

        *on_refresh* receives the result of every scheduled pass.
        """
        if self._refresher is None:

            def task() -> None:
                outdated = self.refresh_all()
                if on_refresh:
                    on_refresh(outdated)

            self._refresher = PeriodicRefresher(task, self.settings.refresh_interval_seconds)
        self._refresher.start()

    def stop(self, timeout: float | None = None) -> None:
        if self._refresher is not None:
            self._refresher.stop(timeout)

    # -- read API ------------------------------------------------------------

    def get_outdated_artifacts(self, on_progress: ProgressCallback | None = None) -> list[OutdatedArtifactInfo]:
        """Cached results, recomputed first when empty or older than the validity window."""
        now = self.clock()
        latest = self.result_store.latest_update(now)
        validity = timedelta(seconds=self.settings.cache_validity_seconds)
        if latest is None or now - latest >= validity:
            logger.debug("Outdated artifact cache is empty or stale, refreshing")
            return self.refresh_all(on_progress)
        return self.result_store.find_all(now)

    def get_tracked_artifacts(self) -> list[AppArtifact]:
        return self.artifact_store.find_all()

    def get_available_versions(self) -> dict[str, list[str]]:
        """Available versions per ``app::type::source``.

        A failed fetch is recorded under the same key plus ``::ERROR`` with
        the error message as its only entry.
        """
        start = time.monotonic()
        jobs: list[tuple[str, VersionFetcher, AppArtifact]] = []
        for app in self.provider.get_all_apps():
            for app_version in app.versions:
                for artifact in app_version.artifacts:
                    if not artifact.source:
                        logger.debug("Skipping artifact of %s without a source", app.name)
                        continue
                    fetcher = select_fetcher(self.fetchers, artifact)
                    if fetcher is None:
                        continue
                    key = f"{app.name}::{artifact.artifact_type.value}::{artifact.source}"
                    jobs.append((key, fetcher, artifact))

        result: dict[str, list[str]] = {}
        with ThreadPoolExecutor(max_workers=self.settings.worker_count, thread_name_prefix="driftwatch") as pool:
            futures = [(key, artifact, pool.submit(fetcher.fetch, artifact)) for key, fetcher, artifact in jobs]
            for key, artifact, future in futures:
                try:
                    result[key] = future.result()
                except Exception as e:
                    logger.error("Error fetching versions for artifact %s: %s", artifact.source, e, exc_info=True)
                    result[key + ERROR_SUFFIX] = [str(e)]

        logger.info(
            "Collected available versions in %d ms for %d artifacts",
            (time.monotonic() - start) * 1000,
            len(result),
        )
        return result

    # -- refresh -------------------------------------------------------------

    def refresh_all(self, on_progress: ProgressCallback | None = None) -> list[OutdatedArtifactInfo]:
        """Recompute every artifact of every app's current version.

        The pass always runs to completion; failed artifacts are logged and
        left out. The result replaces the store contents in one step.
        """
        start = time.monotonic()
        jobs: list[tuple[App, AppVersion, AppArtifact]] = [
            (app, app.current_version, artifact)
            for app in self.provider.get_all_apps()
            if app.current_version is not None
            for artifact in app.current_version.artifacts
        ]
        total = len(jobs)

        found: list[OutdatedArtifactInfo] = []
        with ThreadPoolExecutor(max_workers=self.settings.worker_count, thread_name_prefix="driftwatch") as pool:
            futures: dict[Future, AppArtifact] = {
                pool.submit(self._process_isolated, app, app_version, artifact): artifact
                for app, app_version, artifact in jobs
            }
            for done, future in enumerate(as_completed(futures), 1):
                info = future.result()
                if info is not None:
                    found.append(info)
                if on_progress:
                    on_progress(done, total, futures[future].source)

        now = self.clock()
        ttl = self.settings.cache_validity_seconds
        outdated = [info.stamped(now, ttl) for info in found]
        self.result_store.replace_all(outdated)
        logger.info(
            "Refresh completed in %d ms: %d artifacts checked, %d outdated",
            (time.monotonic() - start) * 1000,
            total,
            len(outdated),
        )
        return outdated

    def _process_isolated(
        self, app: App, app_version: AppVersion, artifact: AppArtifact
    ) -> OutdatedArtifactInfo | None:
        try:
            return self.process_artifact(app, app_version, artifact)
        except FetchError as e:
            logger.error("Error fetching versions for artifact %s: %s", artifact.source, e)
        except Exception:
            logger.exception("Error processing artifact %s", artifact.source)
        return None

    def process_artifact(
        self, app: App, app_version: AppVersion, artifact: AppArtifact
    ) -> OutdatedArtifactInfo | None:
        """Fetch and compare one artifact; None unless it is outdated."""
        self._track(artifact)

        current = determine_current_version(artifact, app_version)
        if current is None:
            logger.debug(
                "No current version for %s (%s) in app %s, skipping",
                artifact.source, artifact.artifact_type.value, app.name,
            )
            return None

        fetcher = select_fetcher(self.fetchers, artifact)
        if fetcher is None:
            logger.debug("No fetcher supports %s (%s)", artifact.source, artifact.artifact_type.value)
            return None

        versions = fetcher.fetch(artifact)
        if not versions:
            logger.debug("No available versions found for %s", artifact.source)
            return None

        analysis = analyze(current, versions)
        if not analysis.outdated:
            return None
        if analysis.latest_ga_release is None:
            logger.info(
                "Artifact %s is outdated against pre-release %s, no GA release found",
                artifact.source, analysis.latest_overall_version,
            )
        logger.info(
            "Artifact outdated: app=%s artifact=%s current=%s latest=%s",
            app.name, artifact.source, current,
            analysis.latest_ga_release or analysis.latest_overall_version,
        )
        return OutdatedArtifactInfo(
            app_name=app.name,
            app_id=app.id,
            deployed_app_version=app_version.version,
            artifact_source=artifact.source,
            artifact_type=artifact.artifact_type.value,
            current_artifact_version=current,
            latest_overall_version=analysis.latest_overall_version,
            latest_ga_release=analysis.latest_ga_release,
            latest_pre_release=analysis.latest_pre_release,
            next_minor_version=analysis.next_minor_version,
            next_major_version=analysis.next_major_version,
            major_version_delta=analysis.major_version_delta,
            minor_version_delta=analysis.minor_version_delta,
            available_versions=list(versions),
            artifact_identity=artifact.identity,
        )

    def _track(self, artifact: AppArtifact) -> None:
        try:
            self.artifact_store.save(artifact)
        except Exception as e:
            logger.warning("Failed to save artifact %s: %s", artifact.source, e)
