"""Tests for GitHubSource listing helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import Mock, patch

import github
import pytest
import requests

from config import GitHubConfig
from errors import UpstreamError
from github_source import GitHubSource
from models import SourceRepository


def _make_source(api_url: str = 'https://api.github.com') -> GitHubSource:
    return GitHubSource(GitHubConfig(api_url=api_url, token='gh-token', org='acme'))


def _gh_repo(index: int, **overrides) -> SimpleNamespace:
    fields = dict(
        id=index,
        name=f'repo{index}',
        owner=SimpleNamespace(login='acme'),
        fork=False,
        private=False,
        default_branch='main',
        html_url=f'https://github.com/acme/repo{index}',
        ssh_url=f'git@github.com:acme/repo{index}.git',
        clone_url=f'https://github.com/acme/repo{index}.git',
        description=None,
        updated_at=datetime(2025, 3, 4, 5, 6, 7, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _connected_source(pages: list) -> GitHubSource:
    source = _make_source()
    source.api = Mock()
    source.org = Mock()
    listing = Mock()
    listing.get_page.side_effect = lambda page: pages[page]
    source.org.get_repos.return_value = listing
    return source


def test_list_repositories_stops_at_short_page() -> None:
    pages = [
        [_gh_repo(i) for i in range(100)],
        [_gh_repo(i) for i in range(100, 200)],
        [_gh_repo(i) for i in range(200, 203)],
    ]
    source = _connected_source(pages)

    repos = source.list_repositories()

    assert len(repos) == 203
    assert repos[0].name == 'repo0'
    assert repos[-1].name == 'repo202'
    listing = source.org.get_repos.return_value
    assert [c.args[0] for c in listing.get_page.call_args_list] == [0, 1, 2]


def test_list_repositories_full_last_page_fetches_one_more() -> None:
    pages = [[_gh_repo(i) for i in range(100)], []]
    source = _connected_source(pages)

    repos = source.list_repositories()

    assert len(repos) == 100
    assert source.org.get_repos.return_value.get_page.call_count == 2


def test_list_repositories_converts_entries() -> None:
    source = _connected_source([[_gh_repo(7, fork=True, description='x')]])

    (repo,) = source.list_repositories()

    assert repo == SourceRepository(
        id=7,
        name='repo7',
        owner='acme',
        fork=True,
        private=False,
        default_branch='main',
        html_url='https://github.com/acme/repo7',
        ssh_url='git@github.com:acme/repo7.git',
        clone_url='https://github.com/acme/repo7.git',
        description='x',
        updated_at='2025-03-04T05:06:07Z',
    )


def test_list_repositories_api_error_is_upstream_error() -> None:
    source = _make_source()
    source.api = Mock()
    source.org = Mock()
    source.org.get_repos.return_value.get_page.side_effect = github.GithubException(
        500, {'message': 'Server Error'}, None
    )

    with pytest.raises(UpstreamError) as excinfo:
        source.list_repositories()

    assert excinfo.value.status == 500
    assert excinfo.value.service == 'GitHub'
    assert 'Server Error' in str(excinfo.value)


def test_list_repositories_rejects_malformed_entry() -> None:
    source = _connected_source([[SimpleNamespace(name='broken')]])
    with pytest.raises(UpstreamError):
        source.list_repositories()


def test_list_repositories_requires_connect() -> None:
    with pytest.raises(UpstreamError):
        _make_source().list_repositories()


def test_list_branches_returns_names_in_order() -> None:
    source = _make_source()
    source.api = Mock()
    handle = Mock()
    handle.get_branches.return_value = [SimpleNamespace(name='main'), SimpleNamespace(name='dev')]
    source.api.get_repo.return_value = handle

    repo = SourceRepository.from_github(_gh_repo(1))
    assert source.list_branches(repo) == ['main', 'dev']
    source.api.get_repo.assert_called_once_with('acme/repo1', lazy=True)


def test_list_branches_failure_raises_upstream_error() -> None:
    source = _make_source()
    source.api = Mock()
    source.api.get_repo.return_value.get_branches.side_effect = requests.ConnectionError('reset')

    with pytest.raises(UpstreamError):
        source.list_branches(SourceRepository.from_github(_gh_repo(1)))


@patch('github_source.github.Github')
def test_connect_uses_enterprise_base_url(mock_github: Mock) -> None:
    source = _make_source('https://github.acme.com/api/v3')

    source.connect()

    kwargs = mock_github.call_args.kwargs
    assert kwargs['base_url'] == 'https://github.acme.com/api/v3'
    assert kwargs['per_page'] == 100
    mock_github.return_value.get_organization.assert_called_once_with('acme')


@patch('github_source.github.Github')
def test_connect_bad_credentials(mock_github: Mock) -> None:
    mock_github.return_value.get_organization.side_effect = github.BadCredentialsException(
        401, {'message': 'Bad credentials'}, None
    )

    with pytest.raises(UpstreamError) as excinfo:
        _make_source().connect()

    assert excinfo.value.status == 401
