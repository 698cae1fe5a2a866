"""Two-phase population of result records.

Every command fills its record in two passes:

1. ``populate_global``: fields shared by all commands (API key, org id).
2. ``populate``: fields specific to the command.  Runs after the caller
   has built any collaborator that needs the global values, typically the
   authenticated credentials service used as the candidate source for
   identifier-selection fields.

In each pass a field with a non-empty flag value is taken verbatim (no
validation), and every other field becomes one :class:`Question`.  The
questions of a pass are asked together in a single batch.  Nothing is
written to the record until the whole pass has succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ucb.forms import validators
from ucb.forms.choices import CandidateSource, extract_identifier, fetch_choices, selection_validator
from ucb.forms.fields import FieldDescriptor, PromptType, describe
from ucb.forms.prompting import FILE_PATH_HINT, SELECT_PAGE_SIZE, Prompter, PromptKind, Question

logger = logging.getLogger(__name__)

# Always populated by the global pass, never asked again per command.
RESERVED_FIELDS = frozenset({"orgId", "apiKey"})


def populate_global(flags: Mapping[str, str], record: Any, prompter: Prompter) -> Any:
    """Fill the global fields of *record* from *flags* or by prompting."""
    descriptors = [d for d in describe(record) if d.is_global]
    _run_pass(flags, record, prompter, descriptors, resolver=None)
    return record


def populate(
    flags: Mapping[str, str],
    record: Any,
    prompter: Prompter,
    resolver: CandidateSource | None = None,
) -> Any:
    """Fill the command-specific fields of *record*.

    Args:
        flags: External field name to flag value.
        record: The result record to fill.
        prompter: Asks the questions for fields no flag supplied.
        resolver: Candidate source for identifier-selection fields.

    Raises:
        RemoteFetchFailed: if candidates for a selection field can't be fetched.
        PromptAborted: if the user cancels the prompt.
    """
    descriptors = [
        d for d in describe(record)
        if not d.is_global and d.name not in RESERVED_FIELDS
    ]
    _run_pass(flags, record, prompter, descriptors, resolver=resolver)

    for d in descriptors:
        if d.prompt_type is PromptType.IDENTIFIER_SELECT:
            setattr(record, d.attr, extract_identifier(getattr(record, d.attr)))

    return record


def build_question(descriptor: FieldDescriptor, resolver: CandidateSource | None = None) -> Question:
    """Build the question used to ask for *descriptor*."""
    validator = validators.lookup(descriptor.name)
    prompt_type = descriptor.prompt_type

    if prompt_type is PromptType.PASSWORD:
        return Question(name=descriptor.name, kind=PromptKind.PASSWORD, validator=validator)

    if prompt_type is PromptType.FILE_PATH:
        return Question(
            name=descriptor.name,
            message=f"{descriptor.name} {FILE_PATH_HINT}",
            validator=validator,
        )

    if prompt_type is PromptType.IDENTIFIER_SELECT:
        options = fetch_choices(resolver, descriptor.name)
        return Question(
            name=descriptor.name,
            kind=PromptKind.SELECT,
            validator=selection_validator(validator),
            options=tuple(options),
            page_size=SELECT_PAGE_SIZE,
        )

    return Question(name=descriptor.name, validator=validator)


def _run_pass(
    flags: Mapping[str, str],
    record: Any,
    prompter: Prompter,
    descriptors: Iterable[FieldDescriptor],
    resolver: CandidateSource | None,
) -> None:
    pending: dict[str, str] = {}
    questions: list[Question] = []
    attrs: dict[str, str] = {}

    for d in descriptors:
        attrs[d.name] = d.attr
        value = flags.get(d.name)
        if value:
            logger.debug("Field %s supplied by flag", d.name)
            pending[d.attr] = value
        else:
            questions.append(build_question(d, resolver))

    if questions:
        logger.debug("Prompting for %d field(s): %s", len(questions), ", ".join(q.name for q in questions))
        answers = prompter.ask(questions)
        for q in questions:
            pending[attrs[q.name]] = answers.get(q.name, "")

    for attr, value in pending.items():
        setattr(record, attr, value)
