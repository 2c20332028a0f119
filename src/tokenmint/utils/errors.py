"""Error display for the tokenmint CLI.

Provides consistent error formatting with:
- Human-friendly messages
- Suggested fixes
- Hidden stack traces (unless debug mode)
"""

from __future__ import annotations

import os
import sys
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..errors import (
    BalanceError,
    CommandFailure,
    InvalidOperatorInput,
    RetryLimitExceeded,
    WalletError,
    WorkflowError,
)

if TYPE_CHECKING:
    from rich.console import Console

# Debug mode enabled by TOKENMINT_DEBUG=1 or --debug flag
_debug_mode = os.environ.get("TOKENMINT_DEBUG", "0") == "1"


class ErrorCategory(str, Enum):
    """Categories of errors for consistent formatting."""

    COMMAND = "command"  # External CLI failed
    RETRY = "retry"  # Compute price retries exhausted
    INPUT = "input"  # Operator reply not understood
    WALLET = "wallet"  # Keypair file problems
    NETWORK = "network"  # RPC errors
    FILE = "file"  # File not found, permission errors
    WORKFLOW = "workflow"  # Unexpected CLI output or missing state
    INTERNAL = "internal"  # Anything else


@dataclass
class ErrorInfo:
    """Structured error information for consistent display."""

    message: str
    category: ErrorCategory
    suggestion: str | None = None
    details: str | None = None
    original_error: Exception | None = None


def set_debug_mode(enabled: bool) -> None:
    """Enable or disable debug mode for verbose error output."""
    global _debug_mode
    _debug_mode = enabled


def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return _debug_mode


def format_error(error: ErrorInfo, console: Console) -> None:
    """Display an error with consistent styling."""
    console.print(f"[bold red]Error:[/bold red] {error.message}", highlight=False)

    if error.details:
        if _debug_mode or len(error.details) < 200:
            console.print(f"[dim]{error.details}[/dim]", highlight=False)

    if error.suggestion:
        console.print()
        console.print(f"[yellow]Suggestion:[/yellow] {error.suggestion}")

    if _debug_mode and error.original_error:
        console.print()
        console.print("[dim]Stack trace (debug mode):[/dim]")
        tb_lines = traceback.format_exception(
            type(error.original_error),
            error.original_error,
            error.original_error.__traceback__,
        )
        for line in tb_lines:
            console.print(f"[dim]{line.rstrip()}[/dim]", highlight=False)

    if not _debug_mode and error.original_error:
        console.print()
        console.print("[dim]Set TOKENMINT_DEBUG=1 or use --debug for more details[/dim]")


def classify_exception(exception: Exception, context: str = "operation") -> ErrorInfo:
    """Classify an exception into an ErrorInfo."""
    if isinstance(exception, RetryLimitExceeded):
        return ErrorInfo(
            message=f"{context.capitalize()} gave up after {exception.retries} retries",
            category=ErrorCategory.RETRY,
            suggestion="Network may be congested; rerun with a higher --initial-price",
            details=exception.last_failure.first_line if exception.last_failure else None,
            original_error=exception,
        )

    if isinstance(exception, CommandFailure):
        return ErrorInfo(
            message=f"Command failed: {exception.command}",
            category=ErrorCategory.COMMAND,
            suggestion=_command_suggestion(exception),
            details=exception.error_text,
            original_error=exception,
        )

    if isinstance(exception, InvalidOperatorInput):
        return ErrorInfo(
            message=str(exception),
            category=ErrorCategory.INPUT,
            suggestion="Answer yes, no, or a whole number compute unit price",
            original_error=exception,
        )

    if isinstance(exception, WalletError):
        return ErrorInfo(
            message=str(exception),
            category=ErrorCategory.WALLET,
            suggestion="Check 'solana config get' points at a valid keypair file",
            original_error=exception,
        )

    if isinstance(exception, BalanceError):
        return ErrorInfo(
            message=str(exception),
            category=ErrorCategory.NETWORK,
            suggestion="Check network.rpc_url or set TOKENMINT_RPC_URL",
            original_error=exception,
        )

    if isinstance(exception, FileNotFoundError):
        return ErrorInfo(
            message=f"File not found: {exception.filename or exception}",
            category=ErrorCategory.FILE,
            suggestion="Check the path and ensure the file exists",
            original_error=exception,
        )

    if isinstance(exception, PermissionError):
        return ErrorInfo(
            message=f"Permission denied: {exception}",
            category=ErrorCategory.FILE,
            suggestion="Check file permissions or run with appropriate access",
            original_error=exception,
        )

    if isinstance(exception, WorkflowError):
        return ErrorInfo(
            message=f"{context.capitalize()} failed: {exception}",
            category=ErrorCategory.WORKFLOW,
            original_error=exception,
        )

    return ErrorInfo(
        message=f"Internal error: {context}: {exception}",
        category=ErrorCategory.INTERNAL,
        suggestion="This may be a bug. Rerun with --debug and report the stack trace",
        original_error=exception,
    )


def _command_suggestion(failure: CommandFailure) -> str:
    text = failure.error_text.lower()
    if failure.returncode == 127 or "command not found" in text:
        return "Install the Solana CLI tools (solana, solana-keygen, spl-token)"
    if "insufficient funds" in text:
        return "Fund the provider wallet and try again"
    return "Check the command output above"


def handle_exception(
    console: Console,
    exception: Exception,
    context: str = "operation",
    exit_code: int = 1,
    exit_on_error: bool = True,
) -> ErrorInfo:
    """Display a formatted error for exception, exiting unless told otherwise."""
    error = classify_exception(exception, context)

    format_error(error, console)

    if exit_on_error:
        sys.exit(exit_code)

    return error
