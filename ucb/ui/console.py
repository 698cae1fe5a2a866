"""Rich-based console output and the prompt_toolkit prompter.

Provides:
- Themed success and info status lines
- ``TerminalPrompter``: asks form questions with plain, masked and
  paged select-list input, re-asking inline until the validator passes
"""

from __future__ import annotations

import math
import re
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.document import Document
from prompt_toolkit.styles import Style as PTStyle
from prompt_toolkit.validation import ValidationError, Validator
from rich.console import Console as RichConsole
from rich.markup import escape
from rich.theme import Theme

from ucb.forms import PromptAborted, Prompter, PromptKind, Question, ValidationFailed
from ucb.forms.validators import Validator as FieldValidator

# -------------------------------------------------------------------- #
# Color scheme
# -------------------------------------------------------------------- #

THEME = Theme({
    "dim": "#888888",
    "success": "bright_green",
    "info": "bright_cyan",
    "accent": "bright_magenta",
})

# prompt_toolkit style for the input line
PT_STYLE = PTStyle.from_dict({
    "prompt": "#888888",
    "": "#ffffff",
    "validation-toolbar": "bg:#aa0000 #ffffff",
})


class Console:
    """Styled console output."""

    def __init__(self, file=None):
        self._console = RichConsole(theme=THEME, highlight=False, file=file)

    # ------------------------------------------------------------------ #
    # Basic output
    # ------------------------------------------------------------------ #

    def print(self, message: str = "", style: str | None = None, **kwargs):
        """Print a message with optional styling."""
        self._console.print(message, style=style, **kwargs)

    def print_dim(self, message: str):
        self._console.print(message, style="dim")

    def print_success(self, message: str):
        self._console.print(f"[success]✓[/success] {message}")

    def print_info(self, message: str):
        self._console.print(f"[info]→[/info] {message}")


# -------------------------------------------------------------------- #
# Prompting
# -------------------------------------------------------------------- #

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def flag_for(name: str) -> str:
    """Return the command-line option for an external field name (``credId`` → ``--cred-id``)."""
    return "--" + _CAMEL_BOUNDARY_RE.sub("-", name).lower()


class _QuestionValidator(Validator):
    """Adapts a field validator to prompt_toolkit's inline validation."""

    def __init__(self, validator: FieldValidator, strip: bool = True):
        self._validator = validator
        self._strip = strip

    def validate(self, document: Document) -> None:
        text = document.text.strip() if self._strip else document.text
        try:
            self._validator(text)
        except ValidationFailed as exc:
            raise ValidationError(cursor_position=len(document.text), message=str(exc)) from None


class _SelectionValidator(Validator):
    """Accepts a 1-based option number (or ``n``/``p`` to page)."""

    def __init__(self, question: Question, paged: bool):
        self._question = question
        self._paged = paged

    def validate(self, document: Document) -> None:
        text = document.text.strip().lower()
        if self._paged and text in ("n", "p"):
            return

        options = self._question.options
        if not text.isdigit() or not 1 <= int(text) <= len(options):
            raise ValidationError(
                cursor_position=len(document.text),
                message=f"Enter a number between 1 and {len(options)}",
            )
        try:
            self._question.validator(options[int(text) - 1])
        except ValidationFailed as exc:
            raise ValidationError(cursor_position=len(document.text), message=str(exc)) from None


class TerminalPrompter(Prompter):
    """Asks form questions on the terminal.

    Plain and file-path questions use a single input line, passwords are
    masked, and identifier selections show a numbered list one page at a
    time.  Ctrl-C or Ctrl-D aborts the whole batch.
    """

    def __init__(self, console: Console | None = None, session: PromptSession | None = None,
                 interactive: bool | None = None):
        self._console = console or Console()
        self._session = session
        self._interactive = interactive

    def ask(self, questions: list[Question]) -> dict[str, str]:
        if not self._is_interactive():
            missing = ", ".join(flag_for(q.name) for q in questions)
            raise PromptAborted(
                "Input is required but no interactive terminal is available.\n"
                f"Provide the missing values as arguments: {missing}"
            )

        answers: dict[str, str] = {}
        try:
            for question in questions:
                answers[question.name] = self._ask_one(question)
        except (EOFError, KeyboardInterrupt):
            self._console.print()
            raise PromptAborted("Input cancelled.") from None
        return answers

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _is_interactive(self) -> bool:
        if self._interactive is not None:
            return self._interactive
        return sys.stdin.isatty()

    def _get_session(self) -> PromptSession:
        if self._session is None:
            self._session = PromptSession(style=PT_STYLE)
        return self._session

    def _ask_one(self, question: Question) -> str:
        if question.kind is PromptKind.SELECT:
            return self._ask_select(question)

        is_password = question.kind is PromptKind.PASSWORD
        answer = self._get_session().prompt(
            f"? {question.prompt_text}: ",
            is_password=is_password,
            validator=_QuestionValidator(question.validator, strip=not is_password),
            validate_while_typing=False,
        )
        return answer if is_password else answer.strip()

    def _ask_select(self, question: Question) -> str:
        options = question.options
        size = max(question.page_size, 1)
        pages = max(math.ceil(len(options) / size), 1)
        validator = _SelectionValidator(question, paged=pages > 1)
        page = 0

        while True:
            start = page * size
            self._console.print(f"[info]?[/info] {escape(question.prompt_text)}")
            for number, option in enumerate(options[start:start + size], start=start + 1):
                self._console.print(f"  [accent]{number:>3}[/accent]  {escape(option)}")
            if pages > 1:
                self._console.print_dim(f"  Page {page + 1}/{pages} · 'n' next page, 'p' previous page")

            answer = self._get_session().prompt(
                f"Select [1-{len(options)}]: ",
                validator=validator,
                validate_while_typing=False,
            ).strip().lower()

            if answer == "n":
                page = min(page + 1, pages - 1)
            elif answer == "p":
                page = max(page - 1, 0)
            else:
                return options[int(answer) - 1]


# -------------------------------------------------------------------- #
# Module-level singleton
# -------------------------------------------------------------------- #

console = Console()
