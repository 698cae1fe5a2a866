"""Form engine: fills result records from flags and interactive prompts."""

from ucb.forms.choices import Candidate, CandidateSource, extract_identifier
from ucb.forms.errors import PopulationError, PromptAborted, RemoteFetchFailed, ValidationFailed
from ucb.forms.fields import FieldDescriptor, PromptType, describe, form_field
from ucb.forms.populate import RESERVED_FIELDS, populate, populate_global
from ucb.forms.prompting import Prompter, PromptKind, Question

__all__ = [
    "Candidate",
    "CandidateSource",
    "FieldDescriptor",
    "PopulationError",
    "Prompter",
    "PromptAborted",
    "PromptKind",
    "PromptType",
    "Question",
    "RESERVED_FIELDS",
    "RemoteFetchFailed",
    "ValidationFailed",
    "describe",
    "extract_identifier",
    "form_field",
    "populate",
    "populate_global",
]
