#!/usr/bin/env python3
"""Records exchanged between the GitHub source, the FOSSA target and the run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from errors import UpstreamError

URL_FIELDS = ("url", "git_url", "repository_url")


class MatchType(Enum):
    """Key that tied an import record to an existing FOSSA project."""
    LOCATOR = "locator"
    URL = "url"


def _format_timestamp(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return str(value)


@dataclass(frozen=True)
class SourceRepository:
    """A GitHub repository as listed for the organization."""
    id: int
    name: str
    owner: str
    fork: bool
    private: bool
    default_branch: str
    html_url: str
    ssh_url: str
    clone_url: str
    description: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_github(cls, repo: Any) -> "SourceRepository":
        """Build a record from a PyGithub ``Repository``.

        Raises UpstreamError when a field the import needs is missing.
        """
        try:
            name = repo.name
            owner = repo.owner.login
        except AttributeError as e:
            raise UpstreamError("GitHub", f"malformed repository entry: {e}") from e
        if not isinstance(name, str) or not name:
            raise UpstreamError("GitHub", "repository entry without a name")
        if not isinstance(owner, str) or not owner:
            raise UpstreamError("GitHub", f"repository '{name}' has no owner login")

        return cls(
            id=repo.id,
            name=name,
            owner=owner,
            fork=bool(repo.fork),
            private=bool(repo.private),
            default_branch=repo.default_branch or "",
            html_url=repo.html_url or "",
            ssh_url=repo.ssh_url or "",
            clone_url=repo.clone_url or "",
            description=repo.description,
            updated_at=_format_timestamp(repo.updated_at),
        )


@dataclass(frozen=True)
class ImportRecord:
    """One entry of the Quick Import ``repos`` array."""
    id: int
    title: str
    locator: str
    url: str
    description: str
    is_fork: bool
    is_private: bool
    updated_at: Optional[str]
    branch: str
    branches: Tuple[str, ...]
    ssh_clone_url: str
    https_clone_url: str

    def to_payload(self) -> Dict[str, Any]:
        """Render the record in the field layout the import endpoint expects."""
        return {
            "id": self.id,
            "title": self.title,
            "locator": self.locator,
            "url": self.url,
            "description": self.description,
            "isFork": self.is_fork,
            "isPrivate": self.is_private,
            "updated_at": self.updated_at,
            "branch": self.branch,
            "branches": list(self.branches),
            "sshCloneURL": self.ssh_clone_url,
            "httpsCloneURL": self.https_clone_url,
            "connectableProjects": [],
            "connectedProjects": [],
        }


@dataclass(frozen=True)
class ExistingProject:
    """A project FOSSA already knows about. Read-only."""
    locator: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    git_url: Optional[str] = None
    repository_url: Optional[str] = None

    @property
    def urls(self) -> List[str]:
        return [u for u in (self.url, self.git_url, self.repository_url) if u]

    @classmethod
    def from_api(cls, data: Any) -> "ExistingProject":
        """Validate one element of the ``/api/projects`` response."""
        if not isinstance(data, dict):
            raise UpstreamError(
                "FOSSA", f"expected project object, got {type(data).__name__}"
            )
        values: Dict[str, Optional[str]] = {}
        for key in ("locator", "title") + URL_FIELDS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise UpstreamError(
                    "FOSSA",
                    f"project field '{key}' must be a string, "
                    f"got {type(value).__name__}",
                )
            values[key] = value
        return cls(**values)


@dataclass(frozen=True)
class DuplicateMatch:
    """An import record that FOSSA already has."""
    record: ImportRecord
    project: ExistingProject
    match_type: MatchType


@dataclass(frozen=True)
class BatchOutcome:
    """Result of one Quick Import submission (or its dry-run simulation)."""
    index: int
    size: int
    success: bool
    response: Any = None


@dataclass
class RunStatistics:
    """Counters reported at the end of a run."""
    total_github_repos: int = 0
    filtered_repos: int = 0
    existing_projects: int = 0
    new_imports: int = 0
    errors: int = 0
    batches: List[BatchOutcome] = field(default_factory=list)
