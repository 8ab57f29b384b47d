"""
Invocation wrappers for step bodies and lifecycle hooks.

Every call is turned into a tagged Outcome so the retry loops branch on
OK / RETRYABLE / BREAK instead of inspecting exception types at each site.
"""

import inspect
from collections.abc import Callable
from typing import Any

from retryflow.domain.exceptions import BreakSignal
from retryflow.domain.models import Outcome, RunState


async def call(fn: Callable[..., Any], *args: Any) -> Any:
    """Call ``fn``, awaiting the result when it is awaitable."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke(fn: Callable[..., Any], *args: Any) -> Outcome:
    """Run a step body; ordinary errors are retryable, breaks are not."""
    try:
        return Outcome.ok(await call(fn, *args))
    except BreakSignal as signal:
        return Outcome.broken(signal.reason, signal)
    except Exception as error:
        return Outcome.retryable(error)


async def invoke_hook(
    hook: Callable[..., Any] | None, run_state: RunState, *args: Any
) -> Outcome:
    """
    Run a lifecycle hook. Hooks never fail quietly: any error is a break.

    A BreakSignal from the hook keeps the break reason already recorded on
    the run; any other exception becomes the new break reason.
    """
    if hook is None:
        return Outcome.ok()
    try:
        return Outcome.ok(await call(hook, *args))
    except BreakSignal:
        return Outcome.broken(run_state.break_reason)
    except Exception as error:
        return Outcome.broken(error)
