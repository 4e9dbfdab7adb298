#!/usr/bin/env python3
"""Configuration dataclasses for fossa-bulk-import."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_FOSSA_URL = "https://app.fossa.com"
DEFAULT_BATCH_SIZE = 50
DEFAULT_BATCH_DELAY_S = 2.0


@dataclass
class GitHubConfig:
    """GitHub-specific configuration."""
    api_url: str
    token: str
    org: str


@dataclass
class FossaConfig:
    """FOSSA-specific configuration."""
    url: str
    session: str
    filter_value: str
    instance_name: str = ""
    csrf_token: Optional[str] = None


@dataclass
class ImportConfig:
    """Import behavior configuration."""
    dry_run: bool = False
    exclude_forks: bool = False
    exclude_private: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay_s: float = DEFAULT_BATCH_DELAY_S


@dataclass
class Config:
    """Main configuration for a GitHub-to-FOSSA bulk import."""
    github: GitHubConfig
    fossa: FossaConfig
    behavior: ImportConfig
