"""Terminal UI: Rich console output and prompt_toolkit prompting."""

from ucb.ui.console import (
    Console,
    TerminalPrompter,
    console,
    flag_for,
)

__all__ = [
    "Console",
    "TerminalPrompter",
    "console",
    "flag_for",
]
