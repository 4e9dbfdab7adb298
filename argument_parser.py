#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from config import (DEFAULT_BATCH_DELAY_S, DEFAULT_BATCH_SIZE,
                    DEFAULT_FOSSA_URL, DEFAULT_GITHUB_API_URL, Config,
                    FossaConfig, GitHubConfig, ImportConfig)
from errors import ConfigurationError
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_MISSING_ARGUMENTS = 2

MAX_BATCH_SIZE = 1000
MAX_BATCH_DELAY_S = 300.0


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fossa-bulk-import",
        allow_abbrev=False,
        description=(
            "Bulk-import the repositories of a GitHub organization into FOSSA "
            "through the Quick Import API used by the web UI"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dry run to see what would be imported
  %(prog)s --org myorg --token ghp_xxx --session xxx --filter-value 12345 --dry-run

  # Import all repositories excluding forks
  %(prog)s --org myorg --token ghp_xxx --session xxx --filter-value 12345 --exclude-forks

  # Import only public repositories in smaller batches
  %(prog)s --org myorg --token ghp_xxx --session xxx --filter-value 12345 \\
           --exclude-private --batch-size 25

The FOSSA session value is the fossa.sid cookie of a logged-in browser
session; the CSRF token, when required, comes from the same session.
        """,
    )
    return parser


def _add_required_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options every run needs."""
    parser.add_argument(
        "--org",
        dest="org",
        required=True,
        help="GitHub organization name",
    )
    parser.add_argument(
        "--token",
        dest="github_token",
        required=True,
        help="GitHub personal access token",
    )
    parser.add_argument(
        "--session",
        dest="fossa_session",
        required=True,
        help="FOSSA session cookie value (fossa.sid)",
    )
    parser.add_argument(
        "--filter-value",
        dest="filter_value",
        required=True,
        help="GitHub App installation ID",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add behavior and endpoint arguments to parser."""
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Show what would be imported without actually importing",
    )
    parser.add_argument(
        "--exclude-forks",
        action="store_true",
        dest="exclude_forks",
        help="Skip forked repositories",
    )
    parser.add_argument(
        "--exclude-private",
        action="store_true",
        dest="exclude_private",
        help="Skip private repositories",
    )
    parser.add_argument(
        "--instance-name",
        dest="instance_name",
        default="",
        help="GitHub App instance name",
    )
    parser.add_argument(
        "--csrf-token",
        dest="csrf_token",
        help="CSRF token from the browser session (may be required)",
    )
    parser.add_argument(
        "--batch-size",
        dest="batch_size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Number of repos to import per batch (default: {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument(
        "--batch-delay",
        dest="batch_delay_s",
        type=float,
        default=DEFAULT_BATCH_DELAY_S,
        help=f"Seconds to wait between batches (default: {DEFAULT_BATCH_DELAY_S})",
    )
    parser.add_argument(
        "--github-api",
        dest="github_api_url",
        default=DEFAULT_GITHUB_API_URL,
        help="Base URL of the GitHub API",
    )
    parser.add_argument(
        "--fossa-url",
        dest="fossa_url",
        default=DEFAULT_FOSSA_URL,
        help="Base URL of the FOSSA web application",
    )


def build_config(args: argparse.Namespace) -> Config:
    """Validate parsed arguments and assemble the run configuration.

    Raises ConfigurationError on the first invalid value.
    """
    try:
        org = SecurityValidator.validate_org_name(args.org)
        github_token = SecurityValidator.validate_secret(args.github_token, "GitHub token")
        fossa_session = SecurityValidator.validate_secret(args.fossa_session, "FOSSA session")
        csrf_token = None
        if args.csrf_token:
            csrf_token = SecurityValidator.validate_secret(args.csrf_token, "CSRF token")

        filter_value = SecurityValidator.validate_label(args.filter_value, "filter value")
        if not filter_value.strip():
            raise ValueError("filter value must not be empty")
        instance_name = SecurityValidator.validate_label(args.instance_name, "instance name")

        github_api_url = SecurityValidator.validate_url(args.github_api_url, ["https"])
        fossa_url = SecurityValidator.validate_url(args.fossa_url, ["https"])

        if args.batch_size < 1 or args.batch_size > MAX_BATCH_SIZE:
            raise ValueError(f"batch size must be between 1 and {MAX_BATCH_SIZE}")
        if args.batch_delay_s < 0 or args.batch_delay_s > MAX_BATCH_DELAY_S:
            raise ValueError(
                f"batch delay must be between 0 and {MAX_BATCH_DELAY_S:g} seconds"
            )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    return Config(
        github=GitHubConfig(api_url=github_api_url, token=github_token, org=org),
        fossa=FossaConfig(
            url=fossa_url,
            session=fossa_session,
            filter_value=filter_value,
            instance_name=instance_name,
            csrf_token=csrf_token,
        ),
        behavior=ImportConfig(
            dry_run=args.dry_run,
            exclude_forks=args.exclude_forks,
            exclude_private=args.exclude_private,
            batch_size=args.batch_size,
            batch_delay_s=float(args.batch_delay_s),
        ),
    )


def parse_arguments(argv: Optional[List[str]] = None) -> Config:
    """Parse command line arguments and return configuration object."""
    parser = _create_argument_parser()
    _add_required_arguments(parser)
    _add_behavior_arguments(parser)

    args = parser.parse_args(argv)

    try:
        cfg = build_config(args)
    except ConfigurationError as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        Logger.error(f"configuration error: {e}")
        sys.exit(EXIT_MISSING_ARGUMENTS)

    Logger.security_event(
        "CONFIG_VALIDATION", "successfully validated all configuration inputs"
    )
    return cfg
