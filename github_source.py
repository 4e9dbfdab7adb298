#!/usr/bin/env python3
"""GitHub API wrapper for listing organization repositories and branches."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import github
import requests

if TYPE_CHECKING:
    from github.Organization import Organization

from config import DEFAULT_GITHUB_API_URL, GitHubConfig
from errors import UpstreamError
from logging_utils import Logger
from models import SourceRepository

SERVICE = "GitHub"


def _describe(error: github.GithubException) -> str:
    data = error.data
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return str(error)


class GitHubSource:
    """Wrapper around the GitHub API to enumerate an organization's repos."""

    # The org listing stops at the first page shorter than this
    PER_PAGE = 100

    def __init__(self, config: GitHubConfig) -> None:
        self.config = config
        self.api: Optional[github.Github] = None
        self.org: Optional["Organization"] = None

    def connect(self) -> None:
        Logger.info(f"init github API: {self.config.api_url}")
        auth = github.Auth.Token(self.config.token)
        try:
            if self.config.api_url != DEFAULT_GITHUB_API_URL:
                self.api = github.Github(
                    base_url=self.config.api_url, auth=auth, per_page=self.PER_PAGE
                )
            else:
                self.api = github.Github(auth=auth, per_page=self.PER_PAGE)
            self.org = self.api.get_organization(self.config.org)
            Logger.debug(f"github org: {self.org.login}")
        except github.BadCredentialsException as e:
            raise UpstreamError(
                SERVICE, "authentication failed: invalid or expired credentials", e.status
            ) from e
        except github.UnknownObjectException as e:
            raise UpstreamError(
                SERVICE,
                f"organization '{self.config.org}' does not exist or is not "
                "visible to these credentials",
                e.status,
            ) from e
        except github.GithubException as e:
            raise UpstreamError(SERVICE, _describe(e), e.status) from e
        except requests.RequestException as e:
            raise UpstreamError(SERVICE, f"failed to contact github api: {e}") from e

    def _require_org(self) -> "Organization":
        if self.api is None or self.org is None:
            raise UpstreamError(SERVICE, "github API not initialized")
        return self.org

    def list_repositories(self) -> List[SourceRepository]:
        """Return every repository of the organization, page by page."""
        org = self._require_org()
        Logger.info(f"fetching repositories from GitHub organization: {self.config.org}")

        listing = org.get_repos()
        repos: List[SourceRepository] = []
        page = 0
        while True:
            Logger.debug(f"fetching page {page + 1}")
            try:
                entries = listing.get_page(page)
            except github.GithubException as e:
                raise UpstreamError(
                    SERVICE,
                    f"failed to list repositories of '{self.config.org}': {_describe(e)}",
                    e.status,
                ) from e
            except requests.RequestException as e:
                raise UpstreamError(
                    SERVICE, f"failed to list repositories of '{self.config.org}': {e}"
                ) from e

            repos.extend(SourceRepository.from_github(entry) for entry in entries)
            if len(entries) < self.PER_PAGE:
                break
            page += 1

        Logger.info(f"found {len(repos)} repositories")
        return repos

    def list_branches(self, repo: SourceRepository) -> List[str]:
        """Return the branch names of ``repo`` in the order GitHub lists them."""
        if self.api is None:
            raise UpstreamError(SERVICE, "github API not initialized")
        try:
            handle = self.api.get_repo(repo.full_name, lazy=True)
            return [branch.name for branch in handle.get_branches()]
        except github.GithubException as e:
            raise UpstreamError(
                SERVICE,
                f"could not fetch branches for {repo.full_name}: {_describe(e)}",
                e.status,
            ) from e
        except requests.RequestException as e:
            raise UpstreamError(
                SERVICE, f"could not fetch branches for {repo.full_name}: {e}"
            ) from e
