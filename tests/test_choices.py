"""Tests for ucb.forms.choices: remote candidate lists and id extraction."""

import pytest

from ucb.forms import Candidate, RemoteFetchFailed, ValidationFailed, extract_identifier
from ucb.forms.choices import fetch_choices, selection_validator
from ucb.forms.validators import validate_cert_id, validate_required

from conftest import CRED_ID, OTHER_CRED_ID, FakeResolver


class TestCandidate:

    def test_render(self):
        assert Candidate("My Cert", OTHER_CRED_ID).render() == f"My Cert {{{OTHER_CRED_ID}}}"


class TestFetchChoices:

    def test_renders_every_candidate_in_order(self, resolver):
        options = fetch_choices(resolver, "credId")
        assert options == [f"Prod {{{CRED_ID}}}", f"My Cert {{{OTHER_CRED_ID}}}"]
        assert resolver.calls == 1

    def test_fetch_error_raises_remote_fetch_failed(self):
        resolver = FakeResolver(error=ConnectionError("boom"))
        with pytest.raises(RemoteFetchFailed, match="boom") as exc_info:
            fetch_choices(resolver, "certId")
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_no_resolver(self):
        with pytest.raises(RemoteFetchFailed, match="certId"):
            fetch_choices(None, "certId")

    def test_empty_candidate_list(self):
        with pytest.raises(RemoteFetchFailed, match="nothing to choose from"):
            fetch_choices(FakeResolver([]), "certId")


class TestExtractIdentifier:

    def test_extracts_from_rendered_label(self):
        assert extract_identifier(f"My Cert {{{OTHER_CRED_ID}}}") == OTHER_CRED_ID

    def test_bare_identifier_unchanged(self):
        assert extract_identifier(CRED_ID) == CRED_ID

    def test_label_containing_braces(self):
        assert extract_identifier(f"Team {{A}} {{{CRED_ID}}}") == CRED_ID

    def test_value_without_identifier_unchanged(self):
        assert extract_identifier("legacy-id") == "legacy-id"
        assert extract_identifier("") == ""


class TestSelectionValidator:

    def test_validates_embedded_identifier(self):
        validate = selection_validator(validate_cert_id)
        validate(f"Prod {{{CRED_ID}}}")

    def test_rejects_label_without_identifier(self):
        validate = selection_validator(validate_cert_id)
        with pytest.raises(ValidationFailed, match="invalid cert id"):
            validate("Prod {not-an-id}")

    def test_required_passes_for_any_label(self):
        validate = selection_validator(validate_required)
        validate("Prod {legacy}")

    def test_rejects_non_string(self):
        with pytest.raises(ValidationFailed):
            selection_validator(validate_required)(None)
