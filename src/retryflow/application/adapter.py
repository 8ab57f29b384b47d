"""
Adapter-facing result helpers.

Adapter functions answer the agent host with a FunctionReturn: a success
flag and a message, prefixed with ``ERROR:`` on failure.
"""

import logging
from collections.abc import Callable

from retryflow.application.workflow import Workflow
from retryflow.domain.exceptions import WorkflowInterrupted
from retryflow.domain.models import FunctionReturn, WorkflowResult

logger = logging.getLogger(__name__)


def to_result(data: str = "", error: bool = False) -> FunctionReturn:
    """Wrap a message for the agent host."""
    return FunctionReturn(success=not error, data=f"ERROR: {data}" if error else data)


async def run_to_result(
    workflow: Workflow,
    on_success: Callable[[WorkflowResult], str] | None = None,
) -> FunctionReturn:
    """
    Run ``workflow`` and report its outcome as a FunctionReturn.

    Args:
        workflow: Workflow to run
        on_success: Builds the success message from the result; defaults to
            the string form of the last step's result

    Returns:
        Success message, or the break reason / error message on failure
    """
    try:
        result = await workflow.run()
    except WorkflowInterrupted as interrupted:
        reason = interrupted.reason
        return to_result(str(interrupted) if reason is None else str(reason), error=True)
    except Exception as error:
        logger.debug("Workflow %s reported failure: %r", workflow.workflow_id, error)
        return to_result(str(error), error=True)

    if on_success is not None:
        return to_result(on_success(result))
    if result.result_count == 0:
        return to_result()
    return to_result(str(result.get_last_result()))
