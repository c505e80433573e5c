import pytest

from driftwatch.core.fetchers import DockerHubOciFetcher, FetchError, RegistryStatusError
from driftwatch.core.fetchers.dockerhub_oci import AUTH_URL
from driftwatch.models import ArtifactType
from driftwatch.models.app import AppArtifact

SOURCE = "oci://registry-1.docker.io/bitnamicharts/nginx"


@pytest.fixture
def artifact():
    return AppArtifact(source=SOURCE, artifact_type=ArtifactType.HELM, artifact_name="nginx")


@pytest.fixture
def fetcher(session):
    return DockerHubOciFetcher(session)


def test_supports_only_docker_io_oci(fetcher, artifact):
    assert fetcher.supports(artifact)
    assert not fetcher.supports(AppArtifact("oci://ghcr.io/o/c", ArtifactType.HELM))
    assert not fetcher.supports(AppArtifact("https://charts.bitnami.com/bitnami", ArtifactType.HELM))


def test_token_then_tags(fetcher, session, make_response, artifact):
    session.get.side_effect = [
        make_response(json_body={"token": "abc"}),
        make_response(json_body={"name": "bitnamicharts/nginx", "tags": ["15.0.0", "15.1.0", "latest"]}),
    ]

    assert fetcher.fetch(artifact) == ["15.1.0", "15.0.0"]

    token_call, tags_call = session.get.call_args_list
    assert token_call.args[0] == AUTH_URL
    assert token_call.kwargs["params"] == {
        "service": "registry.docker.io",
        "scope": "repository:bitnamicharts/nginx:pull",
    }
    assert tags_call.args[0] == "https://registry-1.docker.io/v2/bitnamicharts/nginx/tags/list"
    assert tags_call.kwargs["headers"]["Authorization"] == "Bearer abc"


def test_cached_by_source(fetcher, session, make_response, artifact):
    session.get.side_effect = [
        make_response(json_body={"token": "abc"}),
        make_response(json_body={"tags": ["1.0.0"]}),
    ]
    fetcher.fetch(artifact)
    other_name = AppArtifact(source=SOURCE, artifact_type=ArtifactType.HELM, artifact_name="other")
    assert fetcher.fetch(other_name) == ["1.0.0"]
    assert session.get.call_count == 2


def test_empty_token_is_fatal(fetcher, session, make_response, artifact):
    session.get.return_value = make_response(json_body={"token": ""})
    with pytest.raises(FetchError, match="Empty token"):
        fetcher.fetch(artifact)


def test_missing_tags_is_empty(fetcher, session, make_response, artifact):
    session.get.side_effect = [
        make_response(json_body={"token": "abc"}),
        make_response(json_body={"name": "bitnamicharts/nginx"}),
    ]
    assert fetcher.fetch(artifact) == []


def test_auth_failure_raises(fetcher, session, make_response, artifact):
    session.get.return_value = make_response(status_code=401)
    with pytest.raises(RegistryStatusError):
        fetcher.fetch(artifact)


def test_non_docker_hub_source_raises(fetcher, session):
    with pytest.raises(FetchError):
        fetcher._fetch_remote(AppArtifact("oci://ghcr.io/o/c", ArtifactType.HELM))
    session.get.assert_not_called()
