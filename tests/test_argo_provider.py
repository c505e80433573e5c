from datetime import datetime, timezone
from unittest.mock import MagicMock

from driftwatch.core.argo_provider import ArgoAppProvider, app_from_resource
from driftwatch.models import ArtifactType


def _application(**overrides):
    resource = {
        "metadata": {
            "name": "podinfo",
            "uid": "1234",
            "labels": {"env": "prod"},
            "creationTimestamp": "2025-06-01T10:00:00Z",
        },
        "spec": {
            "source": {
                "repoURL": "https://stefanprodan.github.io/podinfo",
                "chart": "podinfo",
                "targetRevision": "6.5.0",
            },
        },
        "status": {
            "sync": {"revision": "6.5.0"},
            "summary": {"images": ["ghcr.io/stefanprodan/podinfo:6.5.0"]},
        },
    }
    resource.update(overrides)
    return resource


def test_helm_application():
    app = app_from_resource(_application())

    assert app.id == "1234"
    assert app.name == "podinfo"
    assert app.labels == {"env": "prod"}
    assert app.first_seen == datetime(2025, 6, 1, 10, tzinfo=timezone.utc)
    assert app.current_version.version == "6.5.0"
    helm, image = app.current_version.artifacts
    assert helm.artifact_type is ArtifactType.HELM
    assert helm.source == "https://stefanprodan.github.io/podinfo"
    assert helm.artifact_name == "podinfo"
    assert helm.metadata == {"chart": "podinfo"}
    assert image.artifact_type is ArtifactType.CONTAINER_IMAGE
    assert image.source == "ghcr.io/stefanprodan/podinfo:6.5.0"


def test_git_sources_and_target_revision_fallback():
    app = app_from_resource(_application(
        spec={"sources": [
            {"repoURL": "https://github.com/org/deploy/", "path": "apps/web", "targetRevision": "v2.3.0"},
            {"repoURL": "https://charts.example.com", "chart": "web", "targetRevision": "2.3.0"},
        ]},
        status={},
    ))

    assert app.current_version.version == "v2.3.0"
    git, helm = app.current_version.artifacts
    assert git.artifact_type is ArtifactType.GIT
    assert git.source == "https://github.com/org/deploy/apps/web"
    assert git.metadata == {"path": "apps/web"}
    assert helm.artifact_name == "web"


def test_unclassifiable_source_and_unknown_version():
    app = app_from_resource({"metadata": {"name": "bare"}, "spec": {"source": {"repoURL": "https://x"}}})
    assert app.id == "bare"
    assert app.current_version.version == "unknown"
    assert app.current_version.artifacts == []


def test_provider_lists_applications():
    k8s = MagicMock()
    k8s.list_custom_resources.return_value = [_application()]

    apps = ArgoAppProvider(k8s, namespace="argocd").get_all_apps()

    assert [a.name for a in apps] == ["podinfo"]
    k8s.list_custom_resources.assert_called_once_with(
        group="argoproj.io", version="v1alpha1", plural="applications", namespace="argocd",
    )


def test_empty_namespace_means_all():
    k8s = MagicMock()
    k8s.list_custom_resources.return_value = []
    ArgoAppProvider(k8s, namespace="").get_all_apps()
    assert k8s.list_custom_resources.call_args.kwargs["namespace"] is None
