"""Fan-in side of the enrichment pipeline.

Enrichment tasks report through two :class:`Conduit` objects, one for
results and one for errors. Once every task is done the supervisor closes
both. :func:`aggregate_results` drains them until both are closed, or stops
at the first error.
"""

import asyncio
from typing import Generic, List, Optional, TypeVar

from ..errors import BatchError

T = TypeVar("T")


class _Closed:
    def __repr__(self) -> str:
        return "<closed>"


CLOSED = _Closed()


class Conduit(Generic[T]):
    """A closable single-slot channel on top of :class:`asyncio.Queue`.

    Closing enqueues a sentinel, so the consumer sees the end of the stream
    only after every value sent before it.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, value: T) -> None:
        if self._closed:
            raise RuntimeError("send on closed conduit")
        await self._queue.put(value)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._queue.put(CLOSED)

    async def receive(self):
        """Return the next value, or ``CLOSED`` once the conduit is drained."""
        return await self._queue.get()


async def aggregate_results(results: Conduit[T], errors: Conduit[BaseException]) -> List[T]:
    """Collect values from ``results`` until both conduits are closed.

    The first value on ``errors`` ends the loop with :class:`BatchError`,
    whatever is still outstanding.
    """
    collected: List[T] = []
    results_open = True
    errors_open = True
    get_result: Optional[asyncio.Task] = None
    get_error: Optional[asyncio.Task] = None

    try:
        while results_open or errors_open:
            if results_open and get_result is None:
                get_result = asyncio.create_task(results.receive())
            if errors_open and get_error is None:
                get_error = asyncio.create_task(errors.receive())

            waiting = [t for t in (get_result, get_error) if t is not None]
            done, _ = await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)

            if get_error in done:
                error = get_error.result()
                get_error = None
                if error is CLOSED:
                    errors_open = False
                else:
                    raise BatchError(error) from error

            if get_result in done:
                item = get_result.result()
                get_result = None
                if item is CLOSED:
                    results_open = False
                else:
                    collected.append(item)
    finally:
        for task in (get_result, get_error):
            if task is not None and not task.done():
                task.cancel()

    return collected
