#!/usr/bin/env python3
"""Fork/private exclusion for the listed GitHub repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from logging_utils import Logger
from models import SourceRepository


@dataclass(frozen=True)
class FilterResult:
    repos: List[SourceRepository]
    forks_excluded: int = 0
    private_excluded: int = 0


def filter_repositories(
    repos: Sequence[SourceRepository], exclude_forks: bool, exclude_private: bool
) -> FilterResult:
    """Drop forks and/or private repositories, keeping the listing order.

    Each count is the number of repos matching that predicate, so a private
    fork counts under both and the result is the same in either order.
    """
    forks = sum(1 for repo in repos if repo.fork) if exclude_forks else 0
    private = sum(1 for repo in repos if repo.private) if exclude_private else 0

    kept = [
        repo
        for repo in repos
        if not (exclude_forks and repo.fork) and not (exclude_private and repo.private)
    ]

    if exclude_forks:
        Logger.info(f"excluded {forks} forks")
    if exclude_private:
        Logger.info(f"excluded {private} private repositories")
    for repo in repos:
        if exclude_forks and repo.fork:
            Logger.debug(f"excluding fork: {repo.full_name}")
        elif exclude_private and repo.private:
            Logger.debug(f"excluding private: {repo.full_name}")
    Logger.info(f"{len(kept)} repositories after filtering")

    return FilterResult(repos=kept, forks_excluded=forks, private_excluded=private)
