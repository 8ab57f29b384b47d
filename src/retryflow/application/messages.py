"""
User-facing message accumulation for adapter functions.

Adapters collect one line per completed step and hand the joined text back
to the agent host, usually through ``to_result``.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from retryflow.application.invocation import call

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SEPARATOR = "\n"

# on_failure(message); may be sync or async
FailureFn = Callable[[str], Any]


class MessagesReleaser:
    """Collects messages and releases them as one separator-prefixed string."""

    def __init__(self, separator: str = DEFAULT_SEPARATOR):
        """
        Args:
            separator: Placed before every message (empty falls back to newline)
        """
        self._separator = separator or DEFAULT_SEPARATOR
        self._messages: list[str] = []

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def add(self, *messages: str) -> None:
        self._messages.extend(messages)

    def release(self, last_message: str | None = None) -> str:
        """
        Join every collected message and start over.

        Args:
            last_message: Appended before joining when non-empty

        Returns:
            ``separator + separator.join(messages)``, or "" when nothing
            was collected
        """
        if last_message:
            self.add(last_message)
        released = (
            self._separator + self._separator.join(self._messages)
            if self._messages
            else ""
        )
        self._messages = []
        return released


class TryStepsExecutor:
    """
    Runs ad-hoc steps, reporting each outcome through a MessagesReleaser.

    A successful step adds its success message; a failing one calls the
    failure callback with its failure message, then re-raises.
    """

    def __init__(
        self,
        on_failure: FailureFn,
        releaser: MessagesReleaser | None = None,
    ):
        """
        Args:
            on_failure: Called with the failure message of a failing step
            releaser: Where success messages go (a fresh one if None)
        """
        self._on_failure = on_failure
        self._releaser = releaser if releaser is not None else MessagesReleaser()

    @property
    def releaser(self) -> MessagesReleaser:
        return self._releaser

    async def execute_step(
        self,
        fn: Callable[[], Awaitable[T]],
        on_success_message: str,
        on_failure_message: str,
    ) -> T:
        """
        Run ``fn`` once.

        Raises:
            Exception: The step's error, unchanged, after on_failure ran
        """
        try:
            result = await fn()
        except Exception as error:
            logger.debug("Step failed (%s): %r", on_failure_message, error)
            await call(self._on_failure, on_failure_message)
            raise
        self._releaser.add(on_success_message)
        return result
