#!/usr/bin/env python3
"""Shapes GitHub repositories into Quick Import records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List

from errors import TransformError, UpstreamError
from logging_utils import Logger
from models import ImportRecord, SourceRepository
from utils import build_locator, git_host_for_url

DEFAULT_BRANCH = "main"

BranchResolver = Callable[[SourceRepository], Iterable[str]]


@dataclass(frozen=True)
class TransformResult:
    record: ImportRecord
    branch_fallback: bool = False


def _resolve_branches(repo: SourceRepository, resolve_branches: BranchResolver) -> List[str]:
    branches = list(resolve_branches(repo))
    if not all(isinstance(name, str) and name for name in branches):
        raise TransformError(f"malformed branch list for {repo.full_name}: {branches!r}")
    return branches


def transform_repository(
    repo: SourceRepository, resolve_branches: BranchResolver
) -> TransformResult:
    """Build the import record for ``repo``; every repository yields one record.

    Issues one branch listing through ``resolve_branches``. A failed or
    malformed listing is not fatal: the record gets ``["main"]`` and
    ``branch_fallback`` is set. The locator host follows ``html_url`` so
    GitHub Enterprise repositories keep their own host.
    """
    branch_fallback = False
    try:
        branches = _resolve_branches(repo, resolve_branches)
    except (UpstreamError, TransformError) as e:
        Logger.warn(f"{e}; using ['{DEFAULT_BRANCH}']")
        branches = [DEFAULT_BRANCH]
        branch_fallback = True

    record = ImportRecord(
        id=repo.id,
        title=repo.name,
        locator=build_locator(repo.owner, repo.name, git_host_for_url(repo.html_url)),
        url=repo.html_url,
        description=repo.description or "",
        is_fork=repo.fork,
        is_private=repo.private,
        updated_at=repo.updated_at,
        branch=repo.default_branch or DEFAULT_BRANCH,
        branches=tuple(branches),
        ssh_clone_url=repo.ssh_url,
        https_clone_url=repo.clone_url,
    )
    return TransformResult(record=record, branch_fallback=branch_fallback)
