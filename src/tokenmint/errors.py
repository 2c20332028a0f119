"""Exceptions raised by tokenmint."""

from __future__ import annotations

from .parsing import first_line


class TokenMintError(Exception):
    """Base class for tokenmint errors."""


class CommandFailure(TokenMintError):
    """An external command exited non-zero or could not be started.

    Carries whatever the process wrote so callers can classify it.
    """

    def __init__(
        self,
        command: str,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        message: str | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        self.explicit_message = bool(message)
        self.message = message or f"Command failed with exit code {returncode}: {command}"
        super().__init__(self.message)

    @property
    def error_text(self) -> str:
        """Captured stderr followed by the descriptive message."""
        parts = [part for part in (self.stderr.strip(), self.message) if part]
        return "\n".join(parts)

    @property
    def classification_text(self) -> str:
        """Stderr, plus the message only when one was given explicitly."""
        if not self.explicit_message:
            return self.stderr.strip()
        return self.error_text

    @property
    def first_line(self) -> str:
        return first_line(self.error_text)


class RetryLimitExceeded(TokenMintError):
    """Transient failures persisted past the retry bound."""

    def __init__(self, retries: int, last_failure: CommandFailure | None = None):
        self.retries = retries
        self.last_failure = last_failure
        detail = f": {last_failure.first_line}" if last_failure else ""
        super().__init__(f"Retry limit exceeded after {retries} retries{detail}")


class InvalidOperatorInput(TokenMintError):
    """Operator reply was not yes, no, or a non-negative integer."""

    def __init__(self, response: str):
        self.response = response
        super().__init__(f"Invalid response {response!r}. Transaction aborted.")


class WalletError(TokenMintError):
    """Keypair file missing, unreadable, or not a valid keypair."""


class BalanceError(TokenMintError):
    """Balance lookup through the RPC node failed."""


class WorkflowError(TokenMintError):
    """A workflow step could not continue (unexpected CLI output, missing state)."""
