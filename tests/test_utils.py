"""Tests for URL normalization, locators and chunking."""

from __future__ import annotations

import pytest

from utils import (build_locator, chunked, git_host_for_api, git_host_for_url,
                   normalize_github_url)


@pytest.mark.parametrize(
    ('url', 'expected'),
    [
        ('https://github.com/acme/Widget.git', 'github.com/acme/widget'),
        ('http://github.com/acme/widget', 'github.com/acme/widget'),
        ('git@github.com:acme/widget.git', 'github.com/acme/widget'),
        ('github.com/ACME/widget', 'github.com/acme/widget'),
        ('', ''),
    ],
)
def test_normalize_github_url_reconciles_forms(url: str, expected: str) -> None:
    assert normalize_github_url(url) == expected


@pytest.mark.parametrize(
    'url',
    [
        'https://github.com/acme/Widget.git',
        'git@github.com:acme/widget.git',
        'HTTPS://GitHub.com/Acme/Widget.GIT',
        'GIT@GITHUB.COM:acme/widget',
        'https://github.com/acme/widget.git.git',
        'https://gitlab.com/acme/widget',
        'github.com/acme/widget',
        '',
    ],
)
def test_normalize_github_url_is_idempotent(url: str) -> None:
    once = normalize_github_url(url)
    assert normalize_github_url(once) == once


def test_https_and_ssh_forms_share_a_key() -> None:
    assert normalize_github_url('https://github.com/acme/Widget.git') == normalize_github_url(
        'git@github.com:acme/widget.git'
    )


def test_build_locator() -> None:
    assert build_locator('acme', 'widget') == 'git+github.com/acme/widget'


def test_build_locator_with_enterprise_host() -> None:
    assert build_locator('acme', 'widget', 'github.acme.com') == 'git+github.acme.com/acme/widget'


def test_normalize_enterprise_ssh_url() -> None:
    assert (
        normalize_github_url('git@github.acme.com:Acme/widget.git', 'github.acme.com')
        == 'github.acme.com/acme/widget'
    )


@pytest.mark.parametrize(
    ('api_url', 'expected'),
    [
        ('https://api.github.com', 'github.com'),
        ('', 'github.com'),
        ('https://github.acme.com/api/v3', 'github.acme.com'),
    ],
)
def test_git_host_for_api(api_url: str, expected: str) -> None:
    assert git_host_for_api(api_url) == expected


@pytest.mark.parametrize(
    ('url', 'expected'),
    [
        ('https://github.com/acme/widget', 'github.com'),
        ('https://github.acme.com/acme/widget', 'github.acme.com'),
        ('', 'github.com'),
    ],
)
def test_git_host_for_url(url: str, expected: str) -> None:
    assert git_host_for_url(url) == expected


@pytest.mark.parametrize(
    ('count', 'size', 'expected_sizes'),
    [
        (5, 2, [2, 2, 1]),
        (4, 2, [2, 2]),
        (1, 50, [1]),
        (0, 3, []),
        (7, 1, [1] * 7),
    ],
)
def test_chunked_sizes(count: int, size: int, expected_sizes: list) -> None:
    items = list(range(count))
    chunks = list(chunked(items, size))
    assert [len(c) for c in chunks] == expected_sizes
    assert [item for chunk in chunks for item in chunk] == items


def test_chunked_rejects_zero_size() -> None:
    with pytest.raises(ValueError):
        list(chunked([1, 2], 0))
