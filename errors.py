#!/usr/bin/env python3
"""Exception hierarchy for fossa-bulk-import."""

from __future__ import annotations

from typing import Any, Optional


class BulkImportError(Exception):
    """Base class for all errors raised by fossa-bulk-import."""


class ConfigurationError(BulkImportError):
    """A required option is missing or invalid."""


class UpstreamError(BulkImportError):
    """A GitHub or FOSSA request failed or returned an unexpected shape."""

    def __init__(self, service: str, message: str, status: Optional[int] = None) -> None:
        self.service = service
        self.status = status
        prefix = f"{service} API error"
        if status is not None:
            prefix += f" {status}"
        super().__init__(f"{prefix}: {message}")


class TransformError(BulkImportError):
    """A repository could not be shaped into an import record."""


class BatchImportError(BulkImportError):
    """A Quick Import batch submission was rejected."""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message)


class ImportCancelled(BulkImportError):
    """The run was cancelled between two requests."""
