#!/usr/bin/env python3
"""FOSSA web API wrapper for listing projects and submitting Quick Imports."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Sequence

import requests

from config import FossaConfig
from errors import BatchImportError, UpstreamError
from logging_utils import Logger
from models import ExistingProject, ImportRecord

SERVICE = "FOSSA"

# Options the web UI sends with every Quick Import from the GitHub App
IMPORT_OPTIONS: Dict[str, Any] = {
    "selectedTeams": [],
    "send_badge_pr": True,
    "policy_update": "organization",
    "policy_access": "default",
    "update_hook": None,
    "vcs_host": "github-app",
    "type": "autobuild",
    "skip_notifications": False,
    "policy_notifications": "true",
}

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
)


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class FossaTarget:
    """Talks to the endpoints behind FOSSA's "Quick Import" page."""

    PROJECTS_PATH = "/api/projects"
    IMPORT_PATH = "/api/services/github-app/import"
    PROJECT_COUNT = 10000

    def __init__(
        self, config: FossaConfig, session: Optional[requests.Session] = None
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _get_api_headers(self) -> Dict[str, str]:
        """Headers that make the request look like the browser UI."""
        headers = {
            "Cookie": f"fossa.sid={self.config.session}",
            "Content-Type": "application/json",
            "X-Requested-With": "XMLHttpRequest",
            "User-Agent": BROWSER_USER_AGENT,
            "Accept": "*/*",
            "Origin": self.config.url,
            "Referer": f"{self.config.url}/projects/import/github-app",
        }
        if self.config.csrf_token:
            headers["csrf-token"] = self.config.csrf_token
        return headers

    def list_projects(self) -> List[ExistingProject]:
        """Fetch every project FOSSA already tracks for this account."""
        Logger.info("fetching existing FOSSA projects")
        url = f"{self.config.url}{self.PROJECTS_PATH}"
        try:
            response = self.session.get(
                url,
                params={"count": self.PROJECT_COUNT},
                headers=self._get_api_headers(),
                timeout=60,
            )
        except requests.RequestException as e:
            raise UpstreamError(SERVICE, f"failed to contact fossa api: {e}") from e

        if response.status_code != 200:
            raise UpstreamError(
                SERVICE, f"project listing failed: {_response_body(response)}",
                response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                SERVICE, "project listing did not return JSON (expired session?)",
                response.status_code,
            ) from e
        if not isinstance(data, list):
            raise UpstreamError(
                SERVICE, f"expected a list of projects, got {type(data).__name__}"
            )

        projects = [ExistingProject.from_api(item) for item in data]
        Logger.info(f"found {len(projects)} existing FOSSA projects")
        return projects

    def build_payload(self, records: Sequence[ImportRecord]) -> Dict[str, Any]:
        return {
            "repos": [record.to_payload() for record in records],
            "options": copy.deepcopy(IMPORT_OPTIONS),
            "instanceName": self.config.instance_name,
            "filterValue": self.config.filter_value,
        }

    def import_batch(self, records: Sequence[ImportRecord]) -> Any:
        """Submit one Quick Import request and return FOSSA's response body.

        Raises BatchImportError when FOSSA does not answer with HTTP 200.
        """
        url = f"{self.config.url}{self.IMPORT_PATH}"
        try:
            response = self.session.post(
                url,
                json=self.build_payload(records),
                headers=self._get_api_headers(),
                timeout=120,
            )
        except requests.RequestException as e:
            raise BatchImportError(f"import request failed: {e}") from e

        body = _response_body(response)
        if response.status_code != 200:
            raise BatchImportError(
                f"import failed: {response.status_code}",
                status=response.status_code,
                body=body,
            )
        return body
