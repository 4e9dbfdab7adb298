#!/usr/bin/env python3
"""Main orchestrator for bulk-importing a GitHub organization into FOSSA."""

from __future__ import annotations

import threading
from typing import List, Optional, Sequence

from batch_importer import BatchImporter
from config import Config
from duplicate_detector import DuplicateDetector
from errors import ImportCancelled, UpstreamError
from fossa_target import FossaTarget
from github_source import GitHubSource
from logging_utils import Logger
from models import BatchOutcome, ImportRecord, RunStatistics, SourceRepository
from repo_filter import filter_repositories
from transformer import transform_repository
from utils import git_host_for_api

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_GITHUB_ERROR = 31
EXIT_FOSSA_ERROR = 32
EXIT_AUTH_ERROR = 40
EXIT_CANCELLED = 130


class ImportOrchestrator:
    def __init__(
        self,
        cfg: Config,
        cancel_event: Optional[threading.Event] = None,
        source: Optional[GitHubSource] = None,
        target: Optional[FossaTarget] = None,
    ) -> None:
        self.cfg = cfg
        self.cancel_event = cancel_event or threading.Event()
        self.gh = source or GitHubSource(cfg.github)
        self.fossa = target or FossaTarget(cfg.fossa)
        self.importer = BatchImporter(
            self.fossa,
            batch_size=cfg.behavior.batch_size,
            delay_s=cfg.behavior.batch_delay_s,
            dry_run=cfg.behavior.dry_run,
            cancel_event=self.cancel_event,
        )

    def run(self) -> int:
        """Execute the import and map the outcome to a process exit code."""
        self._print_banner()
        stats = RunStatistics()
        try:
            self.execute(stats)
        except (ImportCancelled, KeyboardInterrupt) as e:
            Logger.warn(f"run cancelled: {e}" if str(e) else "run cancelled")
            self._print_stats(stats)
            return EXIT_CANCELLED
        except UpstreamError as e:
            Logger.error(f"fatal error: {e}")
            return self._exit_code_for(e)
        except Exception as e:
            Logger.error(f"fatal error: {e}")
            return EXIT_EXECUTION_ERROR

        self._print_stats(stats)
        return EXIT_SUCCESS

    def execute(self, stats: Optional[RunStatistics] = None) -> RunStatistics:
        """Run every stage in order and return the accumulated counters.

        Upstream listing failures propagate; branch fallbacks and failed
        batches are counted in ``stats.errors`` and the run carries on.
        """
        stats = stats if stats is not None else RunStatistics()
        behavior = self.cfg.behavior

        Logger.section(f"fetching repositories from GitHub organization: {self.cfg.github.org}")
        self.gh.connect()
        repos = self.gh.list_repositories()
        stats.total_github_repos = len(repos)

        Logger.section("filtering repositories")
        filtered = filter_repositories(
            repos, behavior.exclude_forks, behavior.exclude_private
        ).repos
        stats.filtered_repos = len(filtered)

        Logger.section("fetching existing FOSSA projects")
        detector = DuplicateDetector(
            self.fossa.list_projects(), host=git_host_for_api(self.cfg.github.api_url)
        )

        Logger.section("transforming repositories for FOSSA")
        records = self._transform_all(filtered, stats)

        Logger.section("checking for existing projects")
        report = detector.classify(records)
        stats.existing_projects = len(report.existing)

        if not report.new:
            Logger.success("no new repositories to import")
            return stats

        Logger.section(
            f"importing {len(report.new)} repositories in batches of {behavior.batch_size}"
        )
        for outcome in self.importer.iter_batches(report.new):
            self._record_outcome(stats, outcome)
        return stats

    def _check_cancelled(self, where: str) -> None:
        if self.cancel_event.is_set():
            raise ImportCancelled(where)

    def _transform_all(
        self, repos: Sequence[SourceRepository], stats: RunStatistics
    ) -> List[ImportRecord]:
        records: List[ImportRecord] = []
        total = len(repos)
        for idx, repo in enumerate(repos, start=1):
            self._check_cancelled(f"before transforming {repo.full_name}")
            result = transform_repository(repo, self.gh.list_branches)
            if result.branch_fallback:
                stats.errors += 1
            records.append(result.record)
            if idx == total or idx % 25 == 0:
                Logger.info(f"transforming: {idx}/{total}")
        return records

    @staticmethod
    def _record_outcome(stats: RunStatistics, outcome: BatchOutcome) -> None:
        stats.batches.append(outcome)
        if outcome.success:
            stats.new_imports += outcome.size
        else:
            stats.errors += outcome.size

    @staticmethod
    def _exit_code_for(error: UpstreamError) -> int:
        if error.status in (401, 403):
            return EXIT_AUTH_ERROR
        if error.service == "FOSSA":
            return EXIT_FOSSA_ERROR
        return EXIT_GITHUB_ERROR

    def _print_banner(self) -> None:
        behavior = self.cfg.behavior
        title = "FOSSA bulk GitHub import"
        if behavior.dry_run:
            title += " (DRY RUN)"
        Logger.table(
            title,
            [
                ("organization:", self.cfg.github.org),
                ("filter value:", self.cfg.fossa.filter_value),
                ("exclude forks:", behavior.exclude_forks),
                ("exclude private:", behavior.exclude_private),
                ("batch size:", behavior.batch_size),
            ],
        )

    def _print_stats(self, stats: RunStatistics) -> None:
        Logger.table(
            "final statistics",
            [
                ("total GitHub repositories:", stats.total_github_repos),
                ("after filtering:", stats.filtered_repos),
                ("already in FOSSA:", stats.existing_projects),
                ("new imports:", stats.new_imports),
                ("errors:", stats.errors),
            ],
        )
        if self.cfg.behavior.dry_run:
            Logger.success("dry run complete")
        else:
            Logger.success("import complete")
