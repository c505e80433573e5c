import logging

import pytest

from driftwatch.core.fetchers import GithubOciFetcher, MalformedPayloadError, RegistryStatusError
from driftwatch.core.fetchers.github_oci import package_versions_url
from driftwatch.models import ArtifactType
from driftwatch.models.app import AppArtifact

SOURCE = "oci://ghcr.io/stefanprodan/charts"


@pytest.fixture
def artifact():
    return AppArtifact(source=SOURCE, artifact_type=ArtifactType.HELM, artifact_name="podinfo")


def _versions(*tag_lists):
    return [{"metadata": {"container": {"tags": list(tags)}}} for tags in tag_lists]


def test_package_url_is_encoded():
    assert package_versions_url(SOURCE, "podinfo") == (
        "https://api.github.com/users/stefanprodan/packages/container/charts%2Fpodinfo/versions"
    )
    assert package_versions_url("oci://ghcr.io/owner/pkg", "") == (
        "https://api.github.com/users/owner/packages/container/pkg/versions"
    )


def test_package_url_needs_a_path():
    assert package_versions_url("oci://ghcr.io/owner", "chart") is None
    assert package_versions_url("https://ghcr.io/owner/pkg", "chart") is None


def test_no_token_returns_empty_without_request(monkeypatch, session, artifact):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    fetcher = GithubOciFetcher(session)

    assert fetcher.fetch(artifact) == []
    session.get.assert_not_called()
    assert fetcher.cache.get(artifact.identity) is None


def test_token_from_environment(monkeypatch, session, make_response, artifact):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    session.get.return_value = make_response(json_body=_versions(["6.5.0"]))

    assert GithubOciFetcher(session).fetch(artifact) == ["6.5.0"]
    headers = session.get.call_args.kwargs["headers"]
    assert headers["Authorization"] == "Bearer env-token"
    assert headers["X-GitHub-Api-Version"] == "2022-11-28"


def test_collects_all_tags(session, make_response, artifact):
    session.get.return_value = make_response(json_body=_versions(["6.5.0", "latest"], ["6.4.0"], [], ["6.5.0"]))
    fetcher = GithubOciFetcher(session, token="t")
    assert fetcher.fetch(artifact) == ["6.5.0", "6.4.0"]
    assert session.get.call_args.kwargs["params"] == {"per_page": 100}


def test_follows_next_links(session, make_response, artifact):
    next_url = "https://api.github.com/users/stefanprodan/packages/container/charts%2Fpodinfo/versions?page=2"
    session.get.side_effect = [
        make_response(json_body=_versions(["6.5.0"]), headers={"Link": f'<{next_url}>; rel="next"'}),
        make_response(json_body=_versions(["5.0.0"])),
    ]
    fetcher = GithubOciFetcher(session, token="t")

    assert fetcher.fetch(artifact) == ["6.5.0", "5.0.0"]
    second = session.get.call_args_list[1]
    assert second.args[0] == next_url
    assert second.kwargs["params"] is None


def test_invalid_source_is_empty(session):
    fetcher = GithubOciFetcher(session, token="t")
    artifact = AppArtifact(source="oci://ghcr.io/owner", artifact_type=ArtifactType.HELM)
    assert fetcher.fetch(artifact) == []
    session.get.assert_not_called()


def test_forbidden_raises(session, make_response, artifact):
    session.get.return_value = make_response(status_code=403, body="{}")
    with pytest.raises(RegistryStatusError):
        GithubOciFetcher(session, token="t").fetch(artifact)


def test_non_json_raises(session, make_response, artifact):
    session.get.return_value = make_response(body="<html>")
    with pytest.raises(MalformedPayloadError):
        GithubOciFetcher(session, token="t").fetch(artifact)


def test_page_limit_logs_truncation(monkeypatch, caplog, session, make_response, artifact):
    monkeypatch.setattr("driftwatch.core.fetchers.github_oci.MAX_PAGES", 2)
    pages = iter([["6.5.0"], ["6.4.0"], ["6.3.0"]])
    link = {"Link": '<https://api.github.com/next?page=n>; rel="next"'}
    session.get.side_effect = lambda *a, **kw: make_response(json_body=_versions(next(pages)), headers=link)
    fetcher = GithubOciFetcher(session, token="t")

    with caplog.at_level(logging.WARNING, logger="driftwatch.core.fetchers.github_oci"):
        assert fetcher.fetch(artifact) == ["6.5.0", "6.4.0"]

    assert session.get.call_count == 2
    assert "truncated" in caplog.text
