"""Shared test fixtures for ucb tests."""

import json

import pytest
import requests

from ucb.forms import Candidate, Prompter

API_KEY = "0123456789abcdef0123456789abcdef"
CRED_ID = "11111111-2222-3333-4444-555555555555"
OTHER_CRED_ID = "a1b2c3d4-e5f6-7890-abcd-1234567890ab"


class FakePrompter(Prompter):
    """Prompter double that answers from a dict and records every batch."""

    def __init__(self, answers=None, error=None):
        self.answers = dict(answers or {})
        self.error = error
        self.batches = []

    def ask(self, questions):
        self.batches.append(list(questions))
        if self.error is not None:
            raise self.error
        return {q.name: self.answers[q.name] for q in questions}

    @property
    def asked(self):
        """Names of every question asked, across batches."""
        return [q.name for batch in self.batches for q in batch]


class FakeResolver:
    """Candidate source double."""

    def __init__(self, candidates=None, error=None):
        self.candidates = list(candidates or [])
        self.error = error
        self.calls = 0

    def fetch_candidates(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.candidates)


def make_response(status_code=200, body=None, text=None):
    """Build a real ``requests.Response`` with the given status and body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = "https://build-api.cloud.unity3d.com/api/v1/test"
    if body is not None:
        resp._content = json.dumps(body).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = (text or "").encode("utf-8")
    return resp


def credential_payload(cred_id=CRED_ID, label="Prod"):
    return {
        "credentialid": cred_id,
        "label": label,
        "created": "2024-01-01T00:00:00.000Z",
        "lastMod": "2024-02-01T00:00:00.000Z",
        "certificate": {
            "teamId": "ABCDE12345",
            "certName": "iPhone Distribution: Example",
            "expiration": "2025-01-01T00:00:00.000Z",
            "isDistribution": True,
            "uploaded": "2024-01-01T00:00:00.000Z",
        },
        "provisioningProfile": {
            "teamId": "ABCDE12345",
            "bundleId": "com.example.app",
            "expiration": "2025-01-01T00:00:00.000Z",
            "isEnterpriseProfile": False,
            "type": "appstore",
            "numDevices": 0,
            "uploaded": "2024-01-01T00:00:00.000Z",
        },
    }


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the user config at an empty temporary directory."""
    path = tmp_path / ".ucb"
    monkeypatch.setenv("UCB_CONFIG_DIR", str(path))
    monkeypatch.delenv("UCB_API_URL", raising=False)
    return path


@pytest.fixture
def candidates():
    return [
        Candidate(label="Prod", canonical_id=CRED_ID),
        Candidate(label="My Cert", canonical_id=OTHER_CRED_ID),
    ]


@pytest.fixture
def resolver(candidates):
    return FakeResolver(candidates)


@pytest.fixture
def cert_files(tmp_path):
    """Create a certificate and a provisioning profile on disk."""
    cert = tmp_path / "prod.p12"
    cert.write_bytes(b"p12-bytes")
    profile = tmp_path / "prod.mobileprovision"
    profile.write_bytes(b"profile-bytes")
    return str(cert), str(profile)
