"""Fan-out side of the enrichment pipeline.

``ConcurrentEnricher.enrich`` starts one task per repository. Each task
fetches the repository's languages and reports exactly one outcome, either a
``RepoResult`` on the results conduit or the exception on the errors
conduit. A supervisor waits for all of them and then closes both conduits.

The batch is all-or-nothing: the first error aborts the aggregation, tells
the remaining tasks to stop, and cancels whatever is still in flight.
"""

import asyncio
from typing import List, Optional, Sequence

from loguru import logger

from ..datasources.base import DataSource
from ..errors import BatchError
from ..schemas import RepoCandidate, RepoResult
from .aggregator import Conduit, aggregate_results


class ConcurrentEnricher:
    def __init__(
        self,
        source: DataSource,
        max_concurrency: int = 16,
        timeout: Optional[float] = None,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.source = source
        self.max_concurrency = max_concurrency
        self.timeout = timeout

    async def _enrich_one(
        self,
        candidate: RepoCandidate,
        gate: asyncio.Semaphore,
        stop: asyncio.Event,
        results: Conduit[RepoResult],
        errors: Conduit[BaseException],
    ) -> None:
        try:
            async with gate:
                if stop.is_set():
                    return
                languages = await self.source.get_languages(candidate)
            result = RepoResult.from_candidate(candidate, languages)
        except Exception as exc:
            logger.warning(f"Error occurred during language fetching for {candidate.full_name}: {exc}")
            # set before sending so queued tasks see it as soon as the gate frees up
            stop.set()
            await errors.send(exc)
            return
        await results.send(result)

    async def _supervise(
        self,
        tasks: List[asyncio.Task],
        results: Conduit[RepoResult],
        errors: Conduit[BaseException],
    ) -> None:
        await asyncio.gather(*tasks, return_exceptions=True)
        await results.close()
        await errors.close()

    async def enrich(self, candidates: Sequence[RepoCandidate]) -> List[RepoResult]:
        """Return one ``RepoResult`` per candidate, in completion order.

        Raises ``BatchError`` wrapping the first failure, or wrapping
        ``asyncio.TimeoutError`` when the batch outlives ``timeout``.
        """
        results: Conduit[RepoResult] = Conduit()
        errors: Conduit[BaseException] = Conduit()
        gate = asyncio.Semaphore(self.max_concurrency)
        stop = asyncio.Event()

        tasks = [
            asyncio.create_task(self._enrich_one(candidate, gate, stop, results, errors))
            for candidate in candidates
        ]
        supervisor = asyncio.create_task(self._supervise(tasks, results, errors))

        try:
            collected = await asyncio.wait_for(
                aggregate_results(results, errors), timeout=self.timeout
            )
        except asyncio.TimeoutError as exc:
            stop.set()
            logger.error(f"Enrichment of {len(tasks)} repositories timed out after {self.timeout}s")
            raise BatchError(exc) from exc
        except BatchError as exc:
            logger.error(f"Aborting batch of {len(tasks)} repositories: {exc}")
            raise
        finally:
            await self._shutdown(tasks, supervisor)

        logger.info(f"Enriched {len(collected)} repositories")
        return collected

    @staticmethod
    async def _shutdown(tasks: List[asyncio.Task], supervisor: asyncio.Task) -> None:
        pending = [t for t in (*tasks, supervisor) if not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
