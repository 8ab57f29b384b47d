#!/usr/bin/env python3
"""
Loading retry policies from a JSON config.

Step policies are looked up by step name when the step is registered.

Run with: python examples/02_config.py
"""

import asyncio

from retryflow import Workflow, WorkflowConfig

CONFIG = {
    "attempts": 2,
    "delay": -1,
    "steps": {
        "fetch": {"attempts": 4, "delay": 0.05},
    },
}


async def main() -> None:
    """Build a workflow from a config dict and run it."""
    config = WorkflowConfig.from_dict(CONFIG)
    calls = {"fetch": 0}

    async def fetch(context):
        calls["fetch"] += 1
        if calls["fetch"] < 3:
            raise ConnectionError("node unavailable")
        return {"block": 1234}

    workflow = Workflow.from_config(config)
    workflow.add_step("fetch", fetch)
    workflow.add_step("report", lambda ctx: f"block {ctx.get_result('fetch')['block']}")

    result = await workflow.run()
    print(f"{result.get_last_result()} after {calls['fetch']} fetch attempts")


if __name__ == "__main__":
    asyncio.run(main())
