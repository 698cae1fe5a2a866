"""Question model and the prompting capability the populator asks through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ucb.forms.validators import Validator, validate_required

FILE_PATH_HINT = "(absolute path, can drag and drop)"
SELECT_PAGE_SIZE = 10


class PromptKind(str, Enum):
    """Input widget used to ask a question."""

    INPUT = "input"
    PASSWORD = "password"
    SELECT = "select"


@dataclass(frozen=True)
class Question:
    """One unanswered field, built by the populator and discarded once asked."""

    name: str
    kind: PromptKind = PromptKind.INPUT
    message: str = ""
    validator: Validator = validate_required
    options: tuple[str, ...] = ()
    page_size: int = SELECT_PAGE_SIZE

    @property
    def prompt_text(self) -> str:
        return self.message or self.name


class Prompter(ABC):
    """Asks a batch of questions and returns the answers.

    Implementations must keep asking a question until its validator passes,
    and raise ``PromptAborted`` when the user cancels.
    """

    @abstractmethod
    def ask(self, questions: list[Question]) -> dict[str, str]:
        """Ask every question in order.

        Returns:
            Mapping of question name to the accepted answer.
        """
