import asyncio
from typing import Dict, List, Optional

import pytest

from repolang.config import Settings
from repolang.errors import DecodeError, TransportError
from repolang.schemas import RepoCandidate


def make_candidate(full_name: str) -> RepoCandidate:
    owner, name = full_name.split("/")
    return RepoCandidate(
        full_name=full_name,
        owner={"login": owner},
        name=name,
        languages_url=f"https://api.github.com/repos/{full_name}/languages",
    )


class FakeSource:
    """In-memory DataSource with per-repository delays and failures."""

    def __init__(
        self,
        languages: Dict[str, Dict[str, int]],
        delays: Optional[Dict[str, float]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ):
        self.languages = languages
        self.delays = delays or {}
        self.failures = failures or {}
        self.started: List[str] = []
        self.finished: List[str] = []
        self.cancelled: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_repositories(self) -> List[RepoCandidate]:
        return [make_candidate(name) for name in self.languages]

    async def get_languages(self, candidate: RepoCandidate) -> Dict[str, int]:
        name = candidate.full_name
        self.started.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(name, 0))
            if name in self.failures:
                raise self.failures[name]
            self.finished.append(name)
            return dict(self.languages[name])
        except asyncio.CancelledError:
            self.cancelled.append(name)
            raise
        finally:
            self.in_flight -= 1


@pytest.fixture
def settings() -> Settings:
    return Settings(
        github_token="test-token",
        github_base_url="https://api.github.test",
        max_concurrency=4,
        batch_timeout_seconds=5,
        log_level="DEBUG",
    )


@pytest.fixture
def languages() -> Dict[str, Dict[str, int]]:
    return {
        "alice/api": {"Go": 10, "Shell": 2},
        "alice/site": {"JavaScript": 300},
        "bob/tool": {"Python": 5},
        "carol/empty": {},
    }


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("error fetching languages for bob/tool: ConnectError", full_name="bob/tool")


@pytest.fixture
def decode_error() -> DecodeError:
    return DecodeError("error decoding languages for bob/tool", full_name="bob/tool")
