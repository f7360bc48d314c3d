from typing import List, Optional

from loguru import logger

from ..datasources.base import DataSource
from ..schemas import FilterSpec, RepoResult
from .enricher import ConcurrentEnricher
from .filters import apply_filter


class RepositoryService:
    def __init__(
        self,
        source: DataSource,
        max_concurrency: int = 16,
        batch_timeout: Optional[float] = None,
    ):
        self.source = source
        self.enricher = ConcurrentEnricher(source, max_concurrency=max_concurrency, timeout=batch_timeout)

    async def list_repositories(self, spec: Optional[FilterSpec] = None) -> List[RepoResult]:
        candidates = await self.source.list_repositories()
        repos = await self.enricher.enrich(candidates)
        if spec is not None and spec.kind:
            repos = apply_filter(repos, spec)
            logger.debug(f"Filter {spec.kind}={spec.value!r} kept {len(repos)} repositories")
        # completion order is arbitrary; sort for a stable response
        return sorted(repos, key=lambda r: r.full_name)
