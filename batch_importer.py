#!/usr/bin/env python3
"""Submits new import records to FOSSA in fixed-size batches."""

from __future__ import annotations

import json
import math
import threading
import time
from typing import Iterator, List, Optional, Sequence

from errors import BatchImportError, ImportCancelled
from fossa_target import FossaTarget
from logging_utils import Logger
from models import BatchOutcome, ImportRecord
from utils import chunked


class BatchImporter:
    """Sequential batch submission with a fixed pause between batches."""

    def __init__(
        self,
        target: FossaTarget,
        batch_size: int,
        delay_s: float,
        dry_run: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch size must be at least 1")
        self.target = target
        self.batch_size = batch_size
        self.delay_s = delay_s
        self.dry_run = dry_run
        self.cancel_event = cancel_event

    def import_all(self, records: Sequence[ImportRecord]) -> List[BatchOutcome]:
        """Import ``records`` batch by batch; a failed batch does not stop the rest."""
        return list(self.iter_batches(records))

    def iter_batches(self, records: Sequence[ImportRecord]) -> Iterator[BatchOutcome]:
        """Yield one outcome per batch as soon as it has been submitted."""
        total = math.ceil(len(records) / self.batch_size)
        for index, batch in enumerate(chunked(records, self.batch_size), start=1):
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise ImportCancelled(f"cancelled before batch {index}/{total}")

            Logger.info(f"batch {index}/{total}: {len(batch)} repositories")
            yield self._import_one(index, batch)

            if index < total:
                Logger.debug(f"waiting {self.delay_s:g} seconds before next batch")
                self._pause()

    def _pause(self) -> None:
        """Wait between batches; a cancellation cuts the wait short."""
        if self.cancel_event is None:
            time.sleep(self.delay_s)
        else:
            self.cancel_event.wait(self.delay_s)

    def _import_one(self, index: int, batch: List[ImportRecord]) -> BatchOutcome:
        if self.dry_run:
            Logger.info("DRY RUN: would import:")
            for record in batch:
                Logger.info(f"  - {record.title} ({record.locator})")
            return BatchOutcome(index=index, size=len(batch), success=True)

        try:
            response = self.target.import_batch(batch)
        except BatchImportError as e:
            Logger.error(f"batch {index} failed: {e}")
            if e.body is not None:
                Logger.error(f"response: {json.dumps(e.body, indent=2, default=str)}")
            return BatchOutcome(
                index=index, size=len(batch), success=False, response=e.body
            )

        Logger.success(
            f"batch {index} imported: {json.dumps(response, default=str)}"
        )
        return BatchOutcome(index=index, size=len(batch), success=True, response=response)
