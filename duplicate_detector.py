#!/usr/bin/env python3
"""Separates import records FOSSA already tracks from genuinely new ones."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from logging_utils import Logger
from models import DuplicateMatch, ExistingProject, ImportRecord, MatchType
from utils import GITHUB_HOST, normalize_github_url


@dataclass
class DuplicateReport:
    new: List[ImportRecord] = field(default_factory=list)
    existing: List[DuplicateMatch] = field(default_factory=list)


class DuplicateDetector:
    """Lookup of existing FOSSA projects by locator and by normalized URL."""

    def __init__(
        self, projects: Iterable[ExistingProject], host: str = GITHUB_HOST
    ) -> None:
        self.host = host
        self.by_locator: Dict[str, ExistingProject] = {}
        self.by_url: Dict[str, ExistingProject] = {}
        for project in projects:
            if project.locator:
                self.by_locator[project.locator] = project
            for url in project.urls:
                if self.host in url:
                    self.by_url[normalize_github_url(url, self.host)] = project

    def match(self, record: ImportRecord) -> Optional[DuplicateMatch]:
        """Return how ``record`` matches an existing project, if it does.

        A locator hit is reported in preference to a URL hit, even when the
        two keys point at different projects.
        """
        if record.locator:
            project = self.by_locator.get(record.locator)
            if project is not None:
                return DuplicateMatch(record, project, MatchType.LOCATOR)
        if record.url:
            project = self.by_url.get(normalize_github_url(record.url, self.host))
            if project is not None:
                return DuplicateMatch(record, project, MatchType.URL)
        return None

    def classify(self, records: Sequence[ImportRecord]) -> DuplicateReport:
        Logger.info("checking for existing projects")
        report = DuplicateReport()
        for record in records:
            found = self.match(record)
            if found is None:
                report.new.append(record)
            else:
                report.existing.append(found)
                Logger.info(
                    f"already imported: {record.title} "
                    f"(matched by {found.match_type.value})"
                )

        Logger.info(f"found {len(report.existing)} existing projects")
        Logger.info(f"found {len(report.new)} new repositories to import")
        return report
