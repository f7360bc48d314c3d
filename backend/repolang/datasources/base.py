from typing import Dict, List, Protocol

from ..schemas import RepoCandidate


class DataSource(Protocol):
    async def list_repositories(self) -> List[RepoCandidate]:
        ...

    async def get_languages(self, candidate: RepoCandidate) -> Dict[str, int]:
        ...
