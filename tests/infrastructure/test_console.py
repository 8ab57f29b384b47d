"""Tests for rich console logging setup."""

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from retryflow.application.workflow import Workflow
from retryflow.infrastructure.console import LOGGER_NAME, configure_logging


@pytest.fixture
def captured():
    """Console writing to a buffer; restores the retryflow logger afterwards."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    buffer = io.StringIO()
    yield Console(file=buffer, width=200), buffer
    logger.handlers = handlers
    logger.setLevel(level)


class TestConfigureLogging:
    def test_installs_rich_handler(self, captured):
        console, _ = captured

        logger = configure_logging(logging.DEBUG, console=console)

        assert logger.name == "retryflow"
        assert logger.level == logging.DEBUG
        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1

    def test_reconfigure_replaces_handler(self, captured):
        console, _ = captured

        configure_logging(console=console)
        logger = configure_logging(logging.WARNING, console=console)

        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert logger.level == logging.WARNING

    @pytest.mark.asyncio
    async def test_step_retries_are_logged(self, captured, flaky):
        console, buffer = captured
        configure_logging(logging.DEBUG, console=console)

        workflow = Workflow().add_step("fetch", flaky(failures=1), attempts=2)
        await workflow.run()

        output = buffer.getvalue()
        assert "Step 'fetch' failed on attempt 1/2" in output
        assert "RuntimeError: failure 1" in output
