"""Compute-price-adjusted command retries.

Runs a command template with a compute unit price substituted in. When the
command fails with a transient error (see classifier), the operator decides
whether to bump the price by a fixed step, set a custom price, or give up.

States:
    ATTEMPTING -> SUCCESS | AWAITING_DECISION | EXHAUSTED | FATAL
    AWAITING_DECISION -> ATTEMPTING | FATAL | INVALID_INPUT
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from ..errors import CommandFailure, InvalidOperatorInput, RetryLimitExceeded
from ..prompt import Prompter
from ..runner import CommandResult, CommandRunner
from .classifier import FailureClass, classify_failure

COMPUTE_PRICE_PLACEHOLDER = "{{COMPUTE_PRICE}}"

DEFAULT_INITIAL_PRICE = 1000
DEFAULT_PRICE_STEP = 1000
DEFAULT_MAX_RETRIES = 5


class ExecutorState(str, Enum):
    """Where the retry loop currently is."""

    ATTEMPTING = "attempting"
    AWAITING_DECISION = "awaiting_decision"
    SUCCESS = "success"
    FATAL = "fatal"
    EXHAUSTED = "exhausted"
    INVALID_INPUT = "invalid_input"


class OperatorDecision(str, Enum):
    """What the operator asked for after a transient failure."""

    INCREASE = "increase"  # "yes": add the price step
    ABORT = "abort"  # "no": give up with the original failure
    CUSTOM = "custom"  # a number: use exactly that price


def substitute_compute_price(template: str, price: int) -> str:
    """Put price into template's placeholder.

    A template without the placeholder comes back unchanged.
    """
    return template.replace(COMPUTE_PRICE_PLACEHOLDER, str(price), 1)


def parse_operator_reply(reply: str) -> tuple[OperatorDecision, int | None]:
    """Interpret a reply to the retry prompt.

    Raises:
        InvalidOperatorInput: reply is not yes, no, or a non-negative integer.
    """
    normalized = reply.strip().lower()

    if normalized == "yes":
        return OperatorDecision.INCREASE, None
    if normalized == "no":
        return OperatorDecision.ABORT, None

    try:
        price = int(normalized)
    except ValueError:
        raise InvalidOperatorInput(reply) from None

    if price < 0:
        raise InvalidOperatorInput(reply)

    return OperatorDecision.CUSTOM, price


def build_retry_question(failure: CommandFailure, price_step: int) -> str:
    """Question shown to the operator after a transient failure."""
    return (
        f"\nTransaction failed: {failure.first_line}\n"
        f"Increase compute unit price by {price_step} and retry "
        f"or insert custom compute unit amount? (yes/no/amount):"
    )


class AdaptiveRetryExecutor:
    """Run command templates, retrying transient failures at a new price.

    The executor does no logging of its own. Callers that want to report
    each retry pass ``on_retry``, which receives the next price and the
    number of retries used so far.
    """

    def __init__(
        self,
        runner: CommandRunner,
        prompter: Prompter,
        initial_price: int = DEFAULT_INITIAL_PRICE,
        price_step: int = DEFAULT_PRICE_STEP,
        max_retries: int = DEFAULT_MAX_RETRIES,
        on_retry: Callable[[int, int], None] | None = None,
    ):
        if initial_price < 0:
            raise ValueError("initial_price must be non-negative")
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")

        self.runner = runner
        self.prompter = prompter
        self.initial_price = initial_price
        self.price_step = price_step
        self.max_retries = max_retries
        self.on_retry = on_retry
        self.state = ExecutorState.ATTEMPTING

    def execute(
        self,
        template: str,
        initial_price: int | None = None,
        max_retries: int | None = None,
    ) -> CommandResult:
        """Run template until it succeeds or the loop terminates.

        Args:
            template: Command containing one ``{{COMPUTE_PRICE}}`` placeholder.
            initial_price: Overrides the executor's starting price.
            max_retries: Overrides the executor's retry bound.

        Returns:
            CommandResult of the first successful attempt.

        Raises:
            CommandFailure: non-transient failure, or the operator answered "no".
            RetryLimitExceeded: transient failures outlasted max_retries.
            InvalidOperatorInput: the operator's reply could not be parsed.
        """
        price = self.initial_price if initial_price is None else initial_price
        limit = self.max_retries if max_retries is None else max_retries
        retries = 0

        while True:
            self.state = ExecutorState.ATTEMPTING
            command = substitute_compute_price(template, price)

            try:
                result = self.runner.run(command)
            except CommandFailure as failure:
                classification = classify_failure(failure.classification_text)
                if classification.failure_class != FailureClass.TRANSIENT:
                    self.state = ExecutorState.FATAL
                    raise

                if retries >= limit:
                    self.state = ExecutorState.EXHAUSTED
                    raise RetryLimitExceeded(retries, failure) from failure

                retries += 1
                self.state = ExecutorState.AWAITING_DECISION
                reply = self.prompter.ask(build_retry_question(failure, self.price_step))

                try:
                    decision, custom_price = parse_operator_reply(reply)
                except InvalidOperatorInput:
                    self.state = ExecutorState.INVALID_INPUT
                    raise

                if decision == OperatorDecision.ABORT:
                    self.state = ExecutorState.FATAL
                    raise failure
                if decision == OperatorDecision.INCREASE:
                    price += self.price_step
                else:
                    price = custom_price  # type: ignore[assignment]

                if self.on_retry:
                    self.on_retry(price, retries)
                continue

            self.state = ExecutorState.SUCCESS
            return result
