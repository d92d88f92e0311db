"""Concurrent fan-out of independent lookups."""
import asyncio
from typing import Any, Awaitable, Dict, List


async def gather_all(**awaitables: Awaitable[Any]) -> Dict[str, Any]:
    """Run named awaitables concurrently and return their results by name.

    Waits until every one has finished. If any raises, the others still in
    flight are cancelled and awaited, and the error of the task that failed
    first is re-raised.
    """
    tasks = {name: asyncio.ensure_future(aw) for name, aw in awaitables.items()}
    if not tasks:
        return {}

    # Done callbacks run in completion order.
    failures: List[asyncio.Future] = []

    def record_failure(task: asyncio.Future) -> None:
        if not task.cancelled() and task.exception() is not None:
            failures.append(task)

    for task in tasks.values():
        task.add_done_callback(record_failure)

    try:
        _, pending = await asyncio.wait(tasks.values(), return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks.values():
            task.cancel()
        await asyncio.gather(*tasks.values(), return_exceptions=True)
        raise

    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    if failures:
        raise failures[0].exception()

    return {name: task.result() for name, task in tasks.items()}
