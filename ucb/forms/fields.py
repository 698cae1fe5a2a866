"""Declarative field annotations and the field descriptor table.

A result record is a dataclass whose fields are declared with
:func:`form_field`.  The annotations are read once per record class and
turned into an immutable tuple of :class:`FieldDescriptor` entries that
the populator walks in declaration order.

Usage::

    @dataclass
    class GetCredentialArgs:
        api_key: str = form_field("apiKey", is_global=True)
        org_id: str = form_field("orgId", is_global=True)
        cred_id: str = form_field("credId", prompt=PromptType.IDENTIFIER_SELECT)

    describe(GetCredentialArgs)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from ucb.forms import validators

# Metadata keys stored on each dataclass field
_NAME_KEY = "ucb.name"
_GLOBAL_KEY = "ucb.global"
_PROMPT_KEY = "ucb.prompt"


class PromptType(str, Enum):
    """How a field is asked for when no flag supplies it."""

    PLAIN = "plain"
    PASSWORD = "password"
    FILE_PATH = "filePath"
    IDENTIFIER_SELECT = "identifierSelect"


@dataclass(frozen=True)
class FieldDescriptor:
    """Static description of one record field."""

    attr: str
    name: str
    is_global: bool = False
    prompt_type: PromptType = PromptType.PLAIN
    has_validator: bool = False


def form_field(
    name: str | None = None,
    *,
    is_global: bool = False,
    prompt: PromptType | str = PromptType.PLAIN,
) -> Any:
    """Declare a record field.

    Args:
        name: External name used for flags, questions and validator lookup.
            Falls back to the attribute name when omitted.
        is_global: Field is shared by every command (API key, org id) and
            populated in the global pass.
        prompt: Prompt type hint used when the field must be asked for.
    """
    metadata: dict[str, Any] = {
        _GLOBAL_KEY: is_global,
        _PROMPT_KEY: PromptType(prompt),
    }
    if name:
        metadata[_NAME_KEY] = name
    return dataclasses.field(default="", metadata=metadata)


def describe(record: Any) -> tuple[FieldDescriptor, ...]:
    """Return the descriptor table for a record instance or record class.

    Raises:
        TypeError: if *record* is not a dataclass.
    """
    record_cls = record if isinstance(record, type) else type(record)
    if not dataclasses.is_dataclass(record_cls):
        raise TypeError(f"{record_cls.__name__} is not a result record (expected a dataclass)")
    return _describe_class(record_cls)


@lru_cache(maxsize=None)
def _describe_class(record_cls: type) -> tuple[FieldDescriptor, ...]:
    descriptors = []
    for f in dataclasses.fields(record_cls):
        name = f.metadata.get(_NAME_KEY) or f.name
        descriptors.append(FieldDescriptor(
            attr=f.name,
            name=name,
            is_global=bool(f.metadata.get(_GLOBAL_KEY, False)),
            prompt_type=PromptType(f.metadata.get(_PROMPT_KEY, PromptType.PLAIN)),
            has_validator=validators.has_validator(name),
        ))
    return tuple(descriptors)
