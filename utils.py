#!/usr/bin/env python3
"""Utility functions for fossa-bulk-import."""

import re
from typing import Iterator, List, Sequence, TypeVar
from urllib.parse import urlparse

T = TypeVar("T")

GITHUB_HOST = "github.com"

_SCHEME_RE = re.compile(r"^(?:https?://)+", re.IGNORECASE)
# Case-insensitive and repeated so that a normalized URL normalizes to itself.
_GIT_SUFFIX_RE = re.compile(r"(?:\.git)+$", re.IGNORECASE)


def normalize_github_url(url: str, host: str = GITHUB_HOST) -> str:
    """Reduce a GitHub URL to a scheme-free, suffix-free lowercase key.

    Example: 'git@github.com:Acme/Widget.git' -> 'github.com/acme/widget'
    """
    url = _SCHEME_RE.sub("", url)
    url = re.sub(rf"^git@{re.escape(host)}:", f"{host}/", url, flags=re.IGNORECASE)
    url = _GIT_SUFFIX_RE.sub("", url)
    return url.lower()


def git_host_for_api(api_url: str) -> str:
    """Return the git hostname served by a GitHub API endpoint."""
    parsed = urlparse(api_url)
    if parsed.netloc in ("", "api.github.com"):
        return GITHUB_HOST
    return parsed.netloc


def git_host_for_url(url: str, default: str = GITHUB_HOST) -> str:
    """Return the hostname of a repository web URL, or ``default``."""
    return urlparse(url).netloc or default


def build_locator(owner: str, name: str, host: str = GITHUB_HOST) -> str:
    """Return the FOSSA locator for a git repository."""
    return f"git+{host}/{owner}/{name}"


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of at most ``size`` items."""
    if size < 1:
        raise ValueError("chunk size must be at least 1")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])
