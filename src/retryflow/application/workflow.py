"""
Workflow: runs an ordered sequence of WorkflowActions.

Owns the sequence-level retry loop: an unhandled step failure re-runs the
whole sequence from the first step. The RunContext of a run survives those
re-runs while the WorkflowResult is rebuilt for every attempt.
"""

import asyncio
import concurrent.futures
import logging
import uuid
from collections.abc import Callable, Coroutine, Mapping
from contextvars import ContextVar
from typing import Any, NoReturn

from retryflow.application.action import ActionFn, StepHook, WorkflowAction
from retryflow.application.config import WorkflowConfig
from retryflow.application.invocation import invoke_hook
from retryflow.application.retry import wait
from retryflow.application.workflow_event_emitter import (
    WorkflowEventEmitter,
    describe,
)
from retryflow.domain.context import RunContext
from retryflow.domain.exceptions import BreakSignal, WorkflowInterrupted
from retryflow.domain.interfaces import (
    WorkflowEventStoreInterface,
    WorkflowInterface,
)
from retryflow.domain.models import (
    Outcome,
    RetryPolicy,
    RunState,
    WorkflowResult,
    WorkflowStatus,
)

logger = logging.getLogger(__name__)

# on_retry(error, context) / on_failure(error, context)
ErrorHook = Callable[[BaseException, RunContext], Any]
# on_success(context)
SuccessHook = Callable[[RunContext], Any]
# on_break(reason, context)
BreakHook = Callable[[Any, RunContext], Any]


def _run_async(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run an async coroutine from sync code."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop and loop.is_running():
        # Inside an event loop already: run on a fresh loop in another thread
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()
    return asyncio.run(coro)


def _surfaced_error(run_state: RunState) -> Exception:
    """The exception a broken run is reported with."""
    reason = run_state.break_reason
    if isinstance(reason, Exception):
        return reason
    return WorkflowInterrupted(reason)


class Workflow(WorkflowInterface):
    """
    Orchestrates WorkflowAction execution.

    Steps run strictly in registration order. Each step retries on its own;
    a step that exhausts its attempts makes the workflow re-run the whole
    sequence, up to the workflow's own attempt budget. ``break_()`` aborts
    both loops at once.
    """

    def __init__(
        self,
        attempts: int = 1,
        delay: float = 0.0,
        on_retry: ErrorHook | None = None,
        on_success: SuccessHook | None = None,
        on_failure: ErrorHook | None = None,
        on_break: BreakHook | None = None,
        event_store: WorkflowEventStoreInterface | None = None,
        workflow_id: str | None = None,
        step_policies: Mapping[str, RetryPolicy] | None = None,
    ):
        """
        Args:
            attempts: Sequence-level attempt budget, >= 1
            delay: Seconds between sequence attempts (0 yields, < 0 skips)
            on_retry: Hook called before each sequence re-run
            on_success: Hook called once every step succeeded
            on_failure: Hook called when sequence attempts are exhausted
            on_break: Hook called when the run is broken
            event_store: Optional store receiving the run's event trace
            workflow_id: Identifier used for emitted events (random if None)
            step_policies: Default retry policies for steps, by step name

        Raises:
            WorkflowConfigError: If attempts < 1
        """
        self._policy = RetryPolicy(attempts=attempts, delay=delay)
        self._on_retry = on_retry
        self._on_success = on_success
        self._on_failure = on_failure
        self._on_break = on_break
        self._event_store = event_store
        self._workflow_id = workflow_id or str(uuid.uuid4())
        self._step_policies = dict(step_policies or {})
        self._actions: list[WorkflowAction[Any]] = []
        # Runs started from other tasks each see their own state
        self._active_run: ContextVar[RunState | None] = ContextVar(
            f"retryflow_run_{self._workflow_id}", default=None
        )
        self._last_run = RunState()

    @classmethod
    def from_config(cls, config: WorkflowConfig, **kwargs: Any) -> "Workflow":
        """
        Build a workflow from a WorkflowConfig.

        Args:
            config: Sequence retry policy and default step policies
            **kwargs: Hooks, event_store and workflow_id

        Returns:
            A workflow with no steps registered yet
        """
        return cls(
            attempts=config.attempts,
            delay=config.delay,
            step_policies=config.steps,
            **kwargs,
        )

    @property
    def workflow_id(self) -> str:
        return self._workflow_id

    @property
    def attempts(self) -> int:
        return self._policy.attempts

    @property
    def delay(self) -> float:
        return self._policy.delay

    @property
    def steps(self) -> tuple[WorkflowAction[Any], ...]:
        return tuple(self._actions)

    @property
    def status(self) -> WorkflowStatus:
        return self._current_run().status

    def add_step(
        self,
        name: str,
        action: ActionFn,
        attempts: int | None = None,
        delay: float | None = None,
        on_retry: StepHook | None = None,
        on_success: StepHook | None = None,
        on_failure: StepHook | None = None,
    ) -> "Workflow":
        """
        Register a step. Steps run in registration order.

        Args:
            name: Step name (duplicates allowed)
            action: The unit of work, called with the RunContext
            attempts: Step attempt budget (defaults to the step policy, else 1)
            delay: Seconds between step attempts (defaults to the step policy)
            on_retry: Hook called before each step retry
            on_success: Hook called after the successful attempt
            on_failure: Hook called when the step exhausted its attempts

        Returns:
            Self for fluent chaining
        """
        policy = self._step_policies.get(name, RetryPolicy())
        return self.add_action(
            WorkflowAction(
                name,
                action,
                attempts=policy.attempts if attempts is None else attempts,
                delay=policy.delay if delay is None else delay,
                on_retry=on_retry,
                on_success=on_success,
                on_failure=on_failure,
            )
        )

    def add_action(self, action: WorkflowAction[Any]) -> "Workflow":
        """Register a prebuilt WorkflowAction. Returns self."""
        self._actions.append(action)
        return self  # Fluent

    # -- break control -------------------------------------------------------

    def _current_run(self) -> RunState:
        """State of the run executing in this task, else the last finished run."""
        active = self._active_run.get()
        return active if active is not None else self._last_run

    def break_(self, reason: Any = None) -> NoReturn:
        """Record ``reason`` on the current run and abort it."""
        self._current_run().record_break(reason)
        raise BreakSignal(reason)

    def was_broken(self) -> bool:
        return self._current_run().broken

    def get_break_reason(self) -> Any:
        return self._current_run().break_reason

    @property
    def break_reason(self) -> Any:
        return self._current_run().break_reason

    # -- execution -----------------------------------------------------------

    async def run(self) -> WorkflowResult:
        """
        Execute every step until the sequence succeeds, fails or is broken.

        Returns:
            WorkflowResult holding the results of the successful attempt

        Raises:
            Exception: The break reason when it is an exception, the last
                step error when sequence attempts are exhausted
            WorkflowInterrupted: When broken with a non-exception reason
        """
        run_state = RunState(status=WorkflowStatus.RUNNING)
        token = self._active_run.set(run_state)
        try:
            return await self._execute(run_state)
        finally:
            self._active_run.reset(token)
            self._last_run = run_state

    async def _execute(self, run_state: RunState) -> WorkflowResult:
        context = RunContext(self, run_state)
        emitter = self._make_emitter()

        logger.info(
            "Running workflow %s: %d steps, %d attempts",
            self._workflow_id,
            len(self._actions),
            self._policy.attempts,
        )
        if emitter:
            emitter.run_start(len(self._actions))

        try:
            return await self._run_sequence(context, emitter)
        except BreakSignal as signal:
            if not run_state.broken:
                run_state.record_break(signal.reason)
        except Exception as error:
            await self._fail(error, context, emitter)

        await self._break(context, emitter)

    def run_sync(self) -> WorkflowResult:
        """Blocking variant of ``run()`` for synchronous callers."""
        result: WorkflowResult = _run_async(self.run())
        return result

    async def _run_sequence(
        self,
        context: RunContext,
        emitter: WorkflowEventEmitter | None,
    ) -> WorkflowResult:
        run_state = context.run_state

        for attempt in range(1, self._policy.attempts + 1):
            context.attempt = attempt
            result = WorkflowResult(attempt)

            try:
                for action in self._actions:
                    context.step_name = action.name
                    value = await action.execute(context, emitter)
                    result.add_result(action.name, value)
                    context.add_result(action.name, value)
            except Exception as error:
                if attempt >= self._policy.attempts:
                    raise

                logger.warning(
                    "Workflow attempt %d/%d failed at step %r: %s",
                    attempt,
                    self._policy.attempts,
                    context.step_name,
                    describe(error),
                )
                if emitter:
                    emitter.sequence_retry(attempt, error)
                self._settle(
                    await invoke_hook(self._on_retry, run_state, error, context),
                    context,
                )
                await wait(self._policy.delay)
                continue

            self._settle(
                await invoke_hook(self._on_success, run_state, context), context
            )
            run_state.status = WorkflowStatus.SUCCEEDED
            logger.info(
                "Workflow %s succeeded on attempt %d", self._workflow_id, attempt
            )
            if emitter:
                emitter.run_success(attempt)
            return result

        raise RuntimeError(
            f"Failed to execute workflow after {self._policy.attempts} attempts"
        )

    async def _fail(
        self,
        error: Exception,
        context: RunContext,
        emitter: WorkflowEventEmitter | None,
    ) -> NoReturn:
        """Sequence attempts exhausted: run on_failure, then re-raise."""
        run_state = context.run_state
        run_state.status = WorkflowStatus.FAILED
        logger.error(
            "Workflow %s failed after %d attempts: %s",
            self._workflow_id,
            self._policy.attempts,
            describe(error),
        )
        if emitter:
            emitter.run_fail(self._policy.attempts, error)

        outcome = await invoke_hook(self._on_failure, run_state, error, context)
        if outcome.is_break:
            run_state.record_break(outcome.reason)
            run_state.status = WorkflowStatus.BROKEN
            raise _surfaced_error(run_state)
        raise error

    async def _break(
        self,
        context: RunContext,
        emitter: WorkflowEventEmitter | None,
    ) -> NoReturn:
        """Run was broken: run on_break, then raise the last recorded reason."""
        run_state = context.run_state
        run_state.status = WorkflowStatus.BROKEN
        logger.warning(
            "Workflow %s broken at step %r: %s",
            self._workflow_id,
            context.step_name,
            describe(run_state.break_reason),
        )
        if emitter:
            emitter.broken(context.step_name or None, run_state.break_reason)

        outcome = await invoke_hook(
            self._on_break, run_state, run_state.break_reason, context
        )
        if outcome.is_break:
            run_state.record_break(outcome.reason)
        raise _surfaced_error(run_state)

    def _settle(self, outcome: Outcome, context: RunContext) -> None:
        """Convert a failed hook into a break of the run."""
        if outcome.is_break:
            context.break_(outcome.reason)

    def _make_emitter(self) -> WorkflowEventEmitter | None:
        if self._event_store is None:
            return None
        return WorkflowEventEmitter(self._event_store, self._workflow_id)

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        return (
            f"Workflow(id={self._workflow_id!r}, steps={len(self._actions)}, "
            f"attempts={self._policy.attempts})"
        )
