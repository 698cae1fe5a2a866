"""Errors raised while populating a result record."""

from knack.util import CLIError


class PopulationError(CLIError):
    """Base class for every failure the form engine reports.

    Subclasses ``CLIError`` so that knack surfaces it as a single terminal
    error message and a non-zero exit code.
    """


class ValidationFailed(PopulationError):
    """A value did not satisfy its field validator.

    Recoverable: the prompter shows the reason and asks again.
    """


class PromptAborted(PopulationError):
    """The user cancelled input, or no terminal was available to ask on."""


class RemoteFetchFailed(PopulationError):
    """Candidates for an identifier-selection field could not be retrieved."""
