"""Tests for CLI error classification and display."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from fakes import failure
from tokenmint.errors import (
    BalanceError,
    InvalidOperatorInput,
    RetryLimitExceeded,
    WalletError,
    WorkflowError,
)
from tokenmint.utils.errors import (
    ErrorCategory,
    ErrorInfo,
    classify_exception,
    format_error,
    handle_exception,
    set_debug_mode,
)


@pytest.fixture
def console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


@pytest.fixture(autouse=True)
def no_debug():
    set_debug_mode(False)
    yield
    set_debug_mode(False)


class TestClassifyException:
    @pytest.mark.parametrize(
        "exception,category",
        [
            (RetryLimitExceeded(5, failure("gas")), ErrorCategory.RETRY),
            (failure("boom"), ErrorCategory.COMMAND),
            (InvalidOperatorInput("maybe"), ErrorCategory.INPUT),
            (WalletError("Keypair file not found at: x"), ErrorCategory.WALLET),
            (BalanceError("down"), ErrorCategory.NETWORK),
            (FileNotFoundError(2, "No such file", "x.csv"), ErrorCategory.FILE),
            (PermissionError("denied"), ErrorCategory.FILE),
            (WorkflowError("no token"), ErrorCategory.WORKFLOW),
            (RuntimeError("oops"), ErrorCategory.INTERNAL),
        ],
    )
    def test_categories(self, exception: Exception, category: ErrorCategory) -> None:
        info = classify_exception(exception)
        assert info.category == category
        assert info.original_error is exception

    def test_retry_details(self) -> None:
        info = classify_exception(RetryLimitExceeded(5, failure("Error: Transaction expired")), "mint")
        assert info.message == "Mint gave up after 5 retries"
        assert info.details == "Error: Transaction expired"

    @pytest.mark.parametrize(
        "stderr,returncode,expected",
        [
            ("sh: spl-token: command not found", 127, "Install the Solana CLI tools"),
            ("insufficient funds for rent", 1, "Fund the provider wallet"),
            ("something else", 1, "Check the command output"),
        ],
    )
    def test_command_suggestions(self, stderr: str, returncode: int, expected: str) -> None:
        info = classify_exception(failure(stderr, returncode=returncode))
        assert info.suggestion.startswith(expected)


class TestFormatError:
    def test_message_and_suggestion(self, console) -> None:
        con, buffer = console

        format_error(ErrorInfo("bad", ErrorCategory.INPUT, suggestion="try again"), con)

        output = buffer.getvalue()
        assert "Error: bad" in output
        assert "Suggestion: try again" in output
        assert "Stack trace" not in output

    def test_debug_mode_shows_trace(self, console) -> None:
        con, buffer = console
        set_debug_mode(True)
        try:
            raise WorkflowError("no token")
        except WorkflowError as e:
            format_error(classify_exception(e), con)

        assert "Stack trace (debug mode)" in buffer.getvalue()


class TestHandleException:
    def test_exits(self, console) -> None:
        con, _ = console
        with pytest.raises(SystemExit) as exc_info:
            handle_exception(con, WalletError("x"), exit_code=3)
        assert exc_info.value.code == 3

    def test_no_exit(self, console) -> None:
        con, buffer = console
        info = handle_exception(con, WalletError("x"), exit_on_error=False)
        assert info.category == ErrorCategory.WALLET
        assert "Error: x" in buffer.getvalue()
