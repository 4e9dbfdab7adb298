#!/usr/bin/env python3
"""Logging utilities for fossa-bulk-import."""

import os
import sys
import time
from typing import Iterable, List, Tuple

import colorama

from security import SecurityValidator

# Initialize colorama for cross-platform colored output
colorama.init(autoreset=True)


class Logger:
    """Handles formatted console output with colors and credential redaction."""

    PROCESS_NAME = "fossa-bulk-import"

    @classmethod
    def debug(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.LIGHTBLACK_EX, *cls._sanitize(messages))

    @classmethod
    def info(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.CYAN, *cls._sanitize(messages))

    @classmethod
    def success(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.GREEN, *cls._sanitize(messages))

    @classmethod
    def warn(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.YELLOW, *cls._sanitize(messages))

    @classmethod
    def error(cls, *messages: str) -> None:
        cls._write_stderr(colorama.Fore.RED, *cls._sanitize(messages))

    @classmethod
    def section(cls, title: str) -> None:
        """Print a bold heading that separates the phases of a run."""
        sys.stdout.write("\n")
        (sanitized,) = cls._sanitize([title])
        cls._write_stdout(colorama.Fore.WHITE, f"{colorama.Style.BRIGHT}{sanitized}")

    @classmethod
    def table(cls, title: str, rows: Iterable[Tuple[str, object]]) -> None:
        """Print aligned ``label: value`` rows under a heading."""
        rows = list(rows)
        cls.section(title)
        width = max((len(label) for label, _ in rows), default=0)
        for label, value in rows:
            cls.info(f"  {label.ljust(width)}  {value}")

    @classmethod
    def security_event(cls, event_type: str, details: str) -> None:
        """Log security events with appropriate sanitization."""
        sanitized_details = SecurityValidator.sanitize_for_logging(details)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        cls._write_stderr(
            colorama.Fore.MAGENTA,
            f"[SECURITY:{event_type}] {timestamp}: {sanitized_details}",
        )

    @staticmethod
    def _sanitize(messages: Iterable[object]) -> List[str]:
        return [SecurityValidator.sanitize_for_logging(str(m)) for m in messages]

    @classmethod
    def _write_stdout(cls, color: str, *messages: str) -> None:
        sys.stdout.write(cls._format_line(color, *messages) + "\n")

    @classmethod
    def _write_stderr(cls, color: str, *messages: str) -> None:
        sys.stderr.write(cls._format_line(color, *messages) + "\n")

    @classmethod
    def _get_header(cls) -> str:
        return f"[{cls.PROCESS_NAME}:{os.getpid()}]"

    @classmethod
    def _format_line(cls, color: str, *messages: str) -> str:
        header = cls._get_header()
        message = " ".join(messages)
        return f"{color}{header}{colorama.Style.RESET_ALL} {message}"
