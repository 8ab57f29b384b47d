"""
WorkflowAction: one named, independently retryable step.

Manages only the step-level retry loop. The sequence-level loop belongs to
Workflow.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from retryflow.application.invocation import invoke, invoke_hook
from retryflow.application.retry import wait
from retryflow.application.workflow_event_emitter import describe
from retryflow.domain.context import RunContext
from retryflow.domain.models import Outcome, RetryPolicy

if TYPE_CHECKING:
    from retryflow.application.workflow_event_emitter import WorkflowEventEmitter

logger = logging.getLogger(__name__)

T = TypeVar("T")

# action(context) -> T | Awaitable[T]
ActionFn = Callable[[RunContext], Any]
# hook(attempt, error_or_result, context)
StepHook = Callable[[int, Any, RunContext], Any]


class WorkflowAction(Generic[T]):
    """
    Wraps a single asynchronous operation with its own retry policy.

    Hooks:
        on_retry(attempt, error, context): before each retry
        on_success(attempt, result, context): after the successful attempt
        on_failure(attempt, error, context): once attempts are exhausted

    A hook that raises turns into a break of the whole run.
    """

    def __init__(
        self,
        name: str,
        action: ActionFn,
        attempts: int = 1,
        delay: float = 0.0,
        on_retry: StepHook | None = None,
        on_success: StepHook | None = None,
        on_failure: StepHook | None = None,
    ):
        """
        Args:
            name: Step name (results are stored under it; need not be unique)
            action: The unit of work, called with the RunContext
            attempts: Attempt budget, >= 1
            delay: Seconds between attempts (0 yields, negative skips waiting)
            on_retry: Hook called before each retry
            on_success: Hook called after a successful attempt
            on_failure: Hook called when every attempt failed

        Raises:
            WorkflowConfigError: If attempts < 1
        """
        self._name = name
        self._action = action
        self._policy = RetryPolicy(attempts=attempts, delay=delay)
        self._on_retry = on_retry
        self._on_success = on_success
        self._on_failure = on_failure
        self.current_attempt = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def attempts(self) -> int:
        return self._policy.attempts

    @property
    def delay(self) -> float:
        return self._policy.delay

    async def execute(
        self,
        context: RunContext,
        emitter: "WorkflowEventEmitter | None" = None,
    ) -> T:
        """
        Execute the action with retry logic.

        Args:
            context: Shared run context
            emitter: Optional event emitter for the run trace

        Returns:
            The action's result

        Raises:
            BreakSignal: Immediately, without retrying, if the run was broken
            Exception: The last attempt's error, unchanged
        """
        for attempt in range(1, self._policy.attempts + 1):
            self.current_attempt = attempt
            context.attempt = attempt
            if emitter:
                emitter.step_start(self._name, attempt)

            outcome = await invoke(self._action, context)

            if outcome.is_break:
                raise outcome.raised()

            if outcome.is_ok:
                self._settle(
                    await invoke_hook(
                        self._on_success,
                        context.run_state,
                        attempt,
                        outcome.value,
                        context,
                    ),
                    context,
                )
                logger.debug("Step %r succeeded on attempt %d", self._name, attempt)
                if emitter:
                    emitter.step_pass(self._name, attempt)
                return outcome.value  # type: ignore[no-any-return]

            error = outcome.raised()

            if attempt >= self._policy.attempts:
                await self._exhausted(error, context, emitter)
                raise error

            logger.warning(
                "Step %r failed on attempt %d/%d: %s",
                self._name,
                attempt,
                self._policy.attempts,
                describe(error),
            )
            if emitter:
                emitter.step_retry(self._name, attempt, error)
            self._settle(
                await invoke_hook(
                    self._on_retry, context.run_state, attempt, error, context
                ),
                context,
            )
            await wait(self._policy.delay)

        raise RuntimeError(
            f"Step {self._name!r} failed after {self._policy.attempts} attempts"
        )

    async def _exhausted(
        self,
        error: BaseException,
        context: RunContext,
        emitter: "WorkflowEventEmitter | None",
    ) -> None:
        """Every attempt failed: report it and run on_failure."""
        logger.error(
            "Step %r failed after %d attempts: %s",
            self._name,
            self._policy.attempts,
            describe(error),
        )
        if emitter:
            emitter.step_fail(self._name, self.current_attempt, error)
        self._settle(
            await invoke_hook(
                self._on_failure,
                context.run_state,
                self.current_attempt,
                error,
                context,
            ),
            context,
        )

    @staticmethod
    def _settle(outcome: Outcome, context: RunContext) -> None:
        """Convert a failed hook into a break of the run."""
        if outcome.is_break:
            context.break_(outcome.reason)

    def __repr__(self) -> str:
        return (
            f"WorkflowAction(name={self._name!r}, attempts={self._policy.attempts}, "
            f"delay={self._policy.delay})"
        )
