"""
RunContext: mutable state shared by every step of one ``run()`` call.

The same context object survives sequence-level retries. Results written by
a step before a later step failed are still visible on the next full re-run,
which lets steps branch on work already done in a previous attempt.
"""

from typing import TYPE_CHECKING, Any, NoReturn

from retryflow.domain.exceptions import BreakSignal
from retryflow.domain.models import ResultStore, RunState

if TYPE_CHECKING:
    from retryflow.domain.interfaces import WorkflowInterface


class RunContext:
    """
    Shared, mutable run state.

    ``attempt`` and ``step_name`` are updated by the engine before every
    invocation so hooks can tell which attempt of which step they run in.
    """

    def __init__(
        self, workflow: "WorkflowInterface", run_state: RunState | None = None
    ):
        """
        Args:
            workflow: The owning workflow (lets callbacks trigger a break)
            run_state: Break/status record of the run this context belongs to
        """
        self._workflow = workflow
        self._run_state = run_state if run_state is not None else RunState()
        self._store = ResultStore()
        self.attempt = 0
        self.step_name = ""

    @property
    def workflow(self) -> "WorkflowInterface":
        return self._workflow

    @property
    def run_state(self) -> RunState:
        return self._run_state

    def add_result(self, name: str, result: Any) -> None:
        self._store.add(name, result)

    def get_result(self, name: str) -> Any:
        """
        Raises:
            KeyError: If no step with this name has produced a result yet
        """
        return self._store.get(name)

    def has_result(self, name: str) -> bool:
        return self._store.has(name)

    @property
    def results(self) -> list[Any]:
        """Every result in write order, duplicates included."""
        return self._store.values

    @property
    def results_by_name(self) -> dict[str, Any]:
        return self._store.by_name

    def break_(self, reason: Any = None) -> NoReturn:
        """Record ``reason`` on this run and abort it."""
        self._run_state.record_break(reason)
        raise BreakSignal(reason)

    def __repr__(self) -> str:
        return (
            f"RunContext(step_name={self.step_name!r}, attempt={self.attempt}, "
            f"results={len(self._store)})"
        )
