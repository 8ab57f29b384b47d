#!/usr/bin/env python3
"""
Basic retryflow example: step retries, sequence retries and a break.

No network access needed. The "exchange" below fails a few times before
answering, which shows both retry levels at work.

Run with: python examples/01_retries.py
"""

import asyncio
import logging

from retryflow import (
    InMemoryWorkflowEventStore,
    Workflow,
    configure_logging,
    run_to_result,
)


class FakeExchange:
    """Quote service that times out twice, then answers."""

    def __init__(self) -> None:
        self.quote_calls = 0

    async def get_quote(self, amount: float) -> float:
        self.quote_calls += 1
        if self.quote_calls <= 2:
            raise TimeoutError(f"quote request {self.quote_calls} timed out")
        return round(amount * 0.98, 2)


async def main() -> None:
    """Run a quote-then-swap workflow against the fake exchange."""
    configure_logging(logging.DEBUG)

    exchange = FakeExchange()
    events = InMemoryWorkflowEventStore()

    async def quote(context):
        return await exchange.get_quote(100.0)

    async def swap(context):
        quoted = context.get_result("quote")
        if quoted < 90:
            # Not worth retrying: abort the whole run
            context.workflow.break_(f"Quote too low: {quoted}")
        return f"swapped 100.0 for {quoted}"

    async def on_retry(attempt, error, context):
        print(f"  retrying {context.step_name} after attempt {attempt}: {error}")

    workflow = (
        Workflow(attempts=2, event_store=events, workflow_id="swap-demo")
        .add_step("quote", quote, attempts=3, delay=0.1, on_retry=on_retry)
        .add_step("swap", swap)
    )

    result = await run_to_result(workflow)

    print(f"\nsuccess={result.success} data={result.data!r}")
    print("\nEvent trace:")
    for event in events.get_events("swap-demo"):
        print(f"  {event.event_type.value:<15} {event.step_name or '-':<6} {event.summary}")


if __name__ == "__main__":
    asyncio.run(main())
