"""Remote-choice resolution for identifier-selection fields.

An identifier-selection field is answered by picking one entry from a
list fetched from the API.  Each entry is rendered as
``"<label> {<canonical id>}"`` so the user sees a readable label, and the
canonical id is cut back out of the chosen string afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from ucb.forms.errors import RemoteFetchFailed, ValidationFailed
from ucb.forms.validators import CERT_ID_PATTERN, Validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A selectable remote entry."""

    label: str
    canonical_id: str

    def render(self) -> str:
        return f"{self.label} {{{self.canonical_id}}}"


class CandidateSource(Protocol):
    """Anything that can list the candidates for an identifier field."""

    def fetch_candidates(self) -> list[Candidate]:
        ...


def fetch_choices(resolver: CandidateSource | None, field_name: str) -> list[str]:
    """Fetch candidates from *resolver* and render them as select options.

    Raises:
        RemoteFetchFailed: if there is no resolver, the fetch fails, or it
            returns nothing to choose from.
    """
    if resolver is None:
        raise RemoteFetchFailed(f"No candidate source available to choose '{field_name}' from.")

    logger.debug("Fetching candidates for %s", field_name)
    try:
        candidates = resolver.fetch_candidates()
    except Exception as exc:
        raise RemoteFetchFailed(f"Could not fetch choices for '{field_name}': {exc}") from exc

    if not candidates:
        raise RemoteFetchFailed(f"There is nothing to choose from for '{field_name}'.")

    return [c.render() for c in candidates]


def extract_identifier(value: str) -> str:
    """Return the first canonical identifier embedded in *value*.

    Values without an embedded identifier are returned unchanged.
    """
    match = CERT_ID_PATTERN.search(value or "")
    return match.group(0) if match else value


def selection_validator(validator: Validator) -> Validator:
    """Wrap *validator* so it checks the identifier inside a rendered label."""

    def validate(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationFailed("invalid selection")
        validator(extract_identifier(value))

    return validate
