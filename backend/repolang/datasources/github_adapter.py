from typing import Annotated, Any, Dict, List, Optional

import httpx
from loguru import logger
from pydantic import Field, StrictInt, TypeAdapter, ValidationError

from ..errors import DecodeError, TransportError, UpstreamError
from ..schemas import RepoCandidate
from .base import DataSource

_candidates_adapter = TypeAdapter(List[RepoCandidate])
# byte counts must be JSON integers; "10", true and 10.0 are rejected
_languages_adapter = TypeAdapter(Dict[str, Annotated[StrictInt, Field(ge=0)]])


class GitHubAdapter(DataSource):
    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        per_page: int = 100,
        page: int = 1,
        timeout: float = 20,
        proxy: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.per_page = per_page
        self.page = page
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "repolang",
            "Authorization": f"Bearer {token}",
        }
        client_kwargs: Dict[str, Any] = {
            "base_url": base_url,
            "headers": self.headers,
            "timeout": timeout,
        }
        if proxy:
            client_kwargs["proxy"] = proxy
        if transport is not None:
            client_kwargs["transport"] = transport
        # one client for the whole process, shared read-only by every request
        self.client = httpx.AsyncClient(**client_kwargs)

    @classmethod
    def from_settings(cls, settings) -> "GitHubAdapter":
        return cls(
            token=settings.github_token or "",
            base_url=str(settings.github_base_url),
            per_page=settings.github_per_page,
            page=settings.github_page,
            timeout=settings.request_timeout_seconds,
            proxy=settings.github_proxy,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None, full_name: Optional[str] = None) -> Any:
        what = f"languages for {full_name}" if full_name else "repositories"
        try:
            resp = await self.client.get(url, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise UpstreamError(
                f"error fetching {what}: GitHub {status}", status_code=status, full_name=full_name
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"error fetching {what}: {type(exc).__name__} {exc!r}", full_name=full_name
            ) from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"error decoding {what}: {exc}", full_name=full_name) from exc

    async def list_repositories(self) -> List[RepoCandidate]:
        params = {"per_page": self.per_page, "page": self.page}
        data = await self._get_json("/repositories", params=params)
        try:
            candidates = _candidates_adapter.validate_python(data)
        except ValidationError as exc:
            raise DecodeError(f"error decoding repositories: {exc.error_count()} invalid fields") from exc
        logger.info(f"Fetched {len(candidates)} repositories from GitHub")
        return candidates

    async def get_languages(self, candidate: RepoCandidate) -> Dict[str, int]:
        data = await self._get_json(candidate.languages_url, full_name=candidate.full_name)
        try:
            return _languages_adapter.validate_python(data)
        except ValidationError as exc:
            raise DecodeError(
                f"error decoding languages for {candidate.full_name}: {exc.error_count()} invalid fields",
                full_name=candidate.full_name,
            ) from exc
