"""iOS signing credential operations."""

from __future__ import annotations

import logging
import os
from contextlib import ExitStack

from ucb.cloudbuild.client import CloudBuildClient
from ucb.cloudbuild.models import Credential
from ucb.forms.choices import Candidate

logger = logging.getLogger(__name__)

_IOS_PATH = ("credentials", "signing", "ios")


class CredentialsService(CloudBuildClient):
    """Fetch, upload, update and delete iOS signing credentials.

    Also serves as the candidate source for credential-selection prompts.
    """

    def list_ios(self) -> list[Credential]:
        """Return every iOS credential in the organization."""
        data = self.get_json(self.org_url(*_IOS_PATH)) or []
        return [Credential.from_dict(item) for item in data]

    def get_ios(self, credential_id: str) -> Credential:
        data = self.get_json(self.org_url(*_IOS_PATH, credential_id))
        return Credential.from_dict(data or {})

    def upload_ios(self, label: str, cert_path: str, profile_path: str, cert_pass: str) -> Credential:
        """Create a new credential from a .p12 certificate and a provisioning profile."""
        logger.info("Uploading iOS credential '%s'", label)
        data = self._send_credential("POST", self.org_url(*_IOS_PATH), label, cert_path, profile_path, cert_pass)
        return Credential.from_dict(data or {})

    def update_ios(
        self,
        credential_id: str,
        label: str,
        cert_path: str,
        profile_path: str,
        cert_pass: str,
    ) -> Credential:
        """Replace the label, certificate and profile of an existing credential."""
        logger.info("Updating iOS credential %s", credential_id)
        data = self._send_credential(
            "PUT", self.org_url(*_IOS_PATH, credential_id), label, cert_path, profile_path, cert_pass
        )
        return Credential.from_dict(data or {})

    def delete_ios(self, credential_id: str) -> int:
        """Delete a credential and return the HTTP status of the response."""
        logger.info("Deleting iOS credential %s", credential_id)
        resp = self.request("DELETE", self.org_url(*_IOS_PATH, credential_id))
        return resp.status_code

    # ------------------------------------------------------------------
    # Candidate source
    # ------------------------------------------------------------------

    def fetch_candidates(self) -> list[Candidate]:
        return [
            Candidate(label=cred.label, canonical_id=cred.credential_id)
            for cred in self.list_ios()
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _send_credential(
        self,
        method: str,
        url: str,
        label: str,
        cert_path: str,
        profile_path: str,
        cert_pass: str,
    ):
        form = {"label": label, "certificatePass": cert_pass}
        with ExitStack() as stack:
            files = {}
            if cert_path:
                files["fileCertificate"] = (
                    os.path.basename(cert_path),
                    stack.enter_context(open(cert_path, "rb")),
                )
            if profile_path:
                files["fileProvisioningProfile"] = (
                    os.path.basename(profile_path),
                    stack.enter_context(open(profile_path, "rb")),
                )
            return self.send_json(method, url, data=form, files=files or None)
