"""Field validators and the process-wide validator registry.

Each validator takes a single value and returns ``None`` when it passes.
A failing value raises :class:`ValidationFailed` carrying a short reason
that the prompter shows to the user before asking again.

Public API
----------
- ``lookup(name)``:            validator registered for *name*, else ``validate_required``
- ``has_validator(name)``:     whether *name* has a field-specific validator
- ``validate_api_key(v)``:     32 lowercase hex characters
- ``validate_cert_id(v)``:     canonical ``8-4-4-4-12`` lowercase hex UUID
- ``validate_file_exists(v)``: a path that exists on disk
- ``validate_required(v)``:    any non-blank string
"""

from __future__ import annotations

import os
import re
from types import MappingProxyType
from typing import Any, Callable

from ucb.forms.errors import ValidationFailed

Validator = Callable[[Any], None]

API_KEY_PATTERN = re.compile(r"[0-9a-f]{32}")
CERT_ID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")


def validate_api_key(value: Any) -> None:
    """Accept exactly 32 lowercase hexadecimal characters."""
    if not isinstance(value, str) or not API_KEY_PATTERN.fullmatch(value):
        raise ValidationFailed("invalid api key")


def validate_cert_id(value: Any) -> None:
    """Accept a lowercase UUID in its canonical hyphenated form."""
    if not isinstance(value, str) or not CERT_ID_PATTERN.fullmatch(value):
        raise ValidationFailed("invalid cert id")


def validate_file_exists(value: Any) -> None:
    """Accept a path naming an existing file or directory."""
    if not isinstance(value, str) or not value or not os.path.exists(value):
        raise ValidationFailed("invalid file")


def validate_required(value: Any) -> None:
    """Default validator: any non-blank string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed("value is required")


_REGISTRY: MappingProxyType[str, Validator] = MappingProxyType({
    "apiKey": validate_api_key,
    "certId": validate_cert_id,
    "certPath": validate_file_exists,
    "profilePath": validate_file_exists,
})


def lookup(name: str) -> Validator:
    """Return the validator for the field with external name *name*."""
    return _REGISTRY.get(name, validate_required)


def has_validator(name: str) -> bool:
    """Return True if *name* has a field-specific validator registered."""
    return name in _REGISTRY
