"""Shared HTTP plumbing for the Cloud Build REST API.

No retries: a failed request raises :class:`CloudBuildError` straight
back to the command.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import requests
from knack.util import CLIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://build-api.cloud.unity3d.com/api/v1"

# Seconds per request.  Uploads of large provisioning profiles can be slow.
DEFAULT_TIMEOUT = 30


class CloudBuildError(CLIError):
    """The Cloud Build API rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CloudBuildClient:
    """Authenticated session scoped to one organization.

    Every request carries ``Authorization: Basic <api key>`` as the Cloud
    Build API expects.
    """

    def __init__(
        self,
        api_key: str,
        org_id: str,
        base_url: str | None = None,
        timeout: int | None = None,
    ):
        self.org_id = org_id
        self.base_url = (base_url or os.environ.get("UCB_API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": f"Basic {api_key}",
            "Accept": "application/json",
        })

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def org_url(self, *parts: str) -> str:
        """Build an absolute URL below ``/orgs/<org id>``."""
        path = "/".join(p.strip("/") for p in ("orgs", self.org_id, *parts) if p)
        return f"{self.base_url}/{path}"

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request and raise ``CloudBuildError`` on any failure."""
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout:
            raise CloudBuildError(
                f"Cloud Build API timed out after {self.timeout}s.\n"
                "Increase the timeout with: ucb config set --key api.timeout --value 60"
            )
        except requests.RequestException as exc:
            raise CloudBuildError(f"Failed to reach Cloud Build API: {exc}") from exc

        if not resp.ok:
            raise CloudBuildError(
                f"Cloud Build API error (HTTP {resp.status_code}): {_error_message(resp)}",
                status_code=resp.status_code,
            )
        return resp

    def get_json(self, url: str, **kwargs: Any) -> Any:
        resp = self.request("GET", url, **kwargs)
        return _json_body(resp)

    def send_json(self, method: str, url: str, **kwargs: Any) -> Any:
        resp = self.request(method, url, **kwargs)
        return _json_body(resp)

    def close(self) -> None:
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _json_body(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as exc:
        raise CloudBuildError(f"Unexpected response from Cloud Build API: {exc}") from exc


def _error_message(resp: requests.Response) -> str:
    """Pull the API's ``error`` field out of a failed response."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:500] or resp.reason or "unknown error"
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return resp.text[:500]
