import json
from unittest.mock import MagicMock

import pytest
import requests

from driftwatch.config.settings import Settings
from driftwatch.models import ArtifactType
from driftwatch.models.app import App, AppArtifact


def build_response(status_code=200, body=None, json_body=None, headers=None):
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if json_body is not None:
        body = json.dumps(json_body)
    response._content = (body or "").encode("utf-8")
    if headers:
        response.headers.update(headers)
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def test_settings():
    return Settings(
        collect_on_startup=False,
        refresh_on_startup=False,
        refresh_interval_seconds=60.0,
        cache_validity_seconds=3600,
        worker_count=4,
        github_token="",
        inventory_file="",
        argo_namespace="",
    )


@pytest.fixture
def helm_artifact():
    return AppArtifact(source="https://charts.example.com", artifact_type=ArtifactType.HELM, artifact_name="demo")


@pytest.fixture
def demo_app(helm_artifact):
    return App.single_version(id="demo-id", name="demo", version="1.2.3", artifacts=[helm_artifact])
