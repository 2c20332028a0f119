"""Operator prompts.

The workflow and retry executor only see the Prompter protocol, so tests
can script replies instead of reading a terminal.
"""

from __future__ import annotations

from typing import Protocol

import click


class Prompter(Protocol):
    """Asks the operator a question and returns the raw reply."""

    def ask(self, question: str, default: str | None = None) -> str:
        ...

    def confirm(self, question: str) -> bool:
        ...


class ConsolePrompter:
    """Prompt on the terminal via click."""

    def ask(self, question: str, default: str | None = None) -> str:
        reply = click.prompt(
            question,
            default=default if default is not None else "",
            show_default=default is not None,
            prompt_suffix=" ",
        )
        return str(reply)

    def confirm(self, question: str) -> bool:
        return self.ask(f"{question} (yes/no):").strip().lower() == "yes"
