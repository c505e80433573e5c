"""Update-type and artifact-type color maps."""

from driftwatch.models import ArtifactType

UPDATE_COLORS: dict[str, str] = {
    "major": "red bold",
    "minor": "yellow",
    "patch": "green",
    "up-to-date": "dim",
    "unknown": "dim",
}

ARTIFACT_TYPE_COLORS: dict[str, str] = {
    ArtifactType.HELM.value: "magenta",
    ArtifactType.GIT.value: "blue",
    ArtifactType.CONTAINER_IMAGE.value: "cyan",
}


def styled_update(update_type: str) -> str:
    color = UPDATE_COLORS.get(update_type, "white")
    return f"[{color}]{update_type}[/{color}]"


def styled_artifact_type(artifact_type: str) -> str:
    color = ARTIFACT_TYPE_COLORS.get(artifact_type, "white")
    return f"[{color}]{artifact_type}[/{color}]"
