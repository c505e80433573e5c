"""Sources of deployed applications."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import yaml

from driftwatch.models.app import App, AppArtifact

logger = logging.getLogger(__name__)

# Scalars stay strings: an unquoted `version: 1.10` must not become 1.1.
_YamlLoader = getattr(yaml, "CBaseLoader", yaml.BaseLoader)


class AppProvider(Protocol):
    def get_all_apps(self) -> list[App]: ...


class InventoryError(Exception):
    """The inventory file is missing or cannot be parsed."""


class StaticAppProvider:
    """Serves a fixed list of apps."""

    def __init__(self, apps: list[App]):
        self.apps = list(apps)

    def get_all_apps(self) -> list[App]:
        return list(self.apps)


class InventoryAppProvider:
    """Reads apps from a YAML inventory file on every call.

    Expected layout::

        apps:
          - id: podinfo
            name: podinfo
            version: 6.5.0
            artifacts:
              - source: https://stefanprodan.github.io/podinfo
                type: helm
                name: podinfo
              - source: ghcr.io/stefanprodan/podinfo:6.5.0
                type: containerImage
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def get_all_apps(self) -> list[App]:
        try:
            data = yaml.load(self.path.read_text(encoding="utf-8"), Loader=_YamlLoader)
        except OSError as e:
            raise InventoryError(f"Cannot read inventory {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise InventoryError(f"Invalid YAML in inventory {self.path}: {e}") from e
        return parse_inventory(data, str(self.path))


def parse_inventory(data: object, origin: str = "<inventory>") -> list[App]:
    if not data:
        return []
    if not isinstance(data, dict) or not isinstance(data.get("apps") or [], list):
        raise InventoryError(f"{origin}: expected a mapping with an 'apps' list")

    apps: list[App] = []
    for i, entry in enumerate(data.get("apps") or []):
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.warning("%s: skipping app #%d without a name", origin, i)
            continue
        artifacts: list[AppArtifact] = []
        for raw in entry.get("artifacts") or []:
            try:
                artifacts.append(AppArtifact.from_dict(raw))
            except (ValueError, AttributeError) as e:
                logger.warning("%s: skipping artifact of %s: %s", origin, entry["name"], e)
        apps.append(App.single_version(
            id=str(entry.get("id") or entry["name"]),
            name=str(entry["name"]),
            version=str(entry.get("version") or "unknown"),
            artifacts=artifacts,
            labels={str(k): str(v) for k, v in (entry.get("labels") or {}).items()},
        ))
    return apps
