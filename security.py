#!/usr/bin/env python3
"""Security validation utilities for fossa-bulk-import."""

import re
from typing import List, Optional


class SecurityValidator:
    """Security validation utilities for input sanitization and validation."""

    MAX_ORG_NAME_LENGTH = 39
    MAX_URL_LENGTH = 2048
    MAX_SECRET_LENGTH = 4096
    MAX_LABEL_LENGTH = 255

    # GitHub logins: alphanumerics and single hyphens, no leading hyphen
    SAFE_ORG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")

    @classmethod
    def validate_org_name(cls, name: str) -> str:
        """Validate a GitHub organization login."""
        if not name or not isinstance(name, str):
            raise ValueError("Organization name must be a non-empty string")

        if len(name) > cls.MAX_ORG_NAME_LENGTH:
            raise ValueError(
                f"Organization name exceeds maximum length of {cls.MAX_ORG_NAME_LENGTH}"
            )

        if not cls.SAFE_ORG_NAME_PATTERN.match(name):
            raise ValueError("Organization name contains invalid characters")

        return name

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an API base URL and return it without a trailing slash."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if "\x00" in url or any(ord(c) < 32 for c in url):
            raise ValueError("URL contains null bytes or control characters")

        if not url.startswith(("http://", "https://")):
            raise ValueError("URL must use http or https scheme")

        if allowed_schemes:
            scheme = url.split("://")[0].lower()
            if scheme not in allowed_schemes:
                raise ValueError(
                    f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
                )

        return url.rstrip("/")

    @classmethod
    def validate_secret(cls, value: str, label: str) -> str:
        """Validate a token or cookie value before it is put in a header."""
        if not value or not isinstance(value, str):
            raise ValueError(f"{label} must be a non-empty string")

        if len(value) > cls.MAX_SECRET_LENGTH:
            raise ValueError(f"{label} exceeds maximum length of {cls.MAX_SECRET_LENGTH}")

        # Header injection
        if any(ord(c) < 32 or c in ";," for c in value) or " " in value:
            raise ValueError(f"{label} contains whitespace, separators or control characters")

        return value

    @classmethod
    def validate_label(cls, value: str, label: str) -> str:
        """Validate free-form identifiers such as the filter value."""
        if not isinstance(value, str):
            raise ValueError(f"{label} must be a string")

        if len(value) > cls.MAX_LABEL_LENGTH:
            raise ValueError(f"{label} exceeds maximum length of {cls.MAX_LABEL_LENGTH}")

        if "\x00" in value or any(ord(c) < 32 for c in value):
            raise ValueError(f"{label} contains null bytes or control characters")

        return value

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        # Patterns to redact
        patterns = [
            (r"https://[^:/@\s]+:[^@\s]+@", "https://[REDACTED]@"),  # URLs with credentials
            (r"fossa\.sid=[^;\s]+", "fossa.sid=[REDACTED]"),  # FOSSA session cookie
            (r"(authorization:\s*(?:token|bearer))\s+[^\s]+", r"\1 [REDACTED]"),  # Auth headers
            (r"csrf-token[=:]\s*[^\s]+", "csrf-token=[REDACTED]"),  # CSRF header
            (r"token[=:]\s*[^\s]+", "token=[REDACTED]"),  # Token assignments
            (r"password[=:]\s*[^\s]+", "password=[REDACTED]"),  # Password assignments
            (r"ghp_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub tokens
            (r"gho_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub OAuth tokens
            (r"ghu_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub user tokens
            (r"ghs_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub server tokens
            (r"ghr_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub refresh tokens
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained PATs
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
