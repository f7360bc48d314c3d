from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class RepoOwner(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    login: str


class RepoCandidate(BaseModel):
    """One entry of GET /repositories, before its languages are known."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    full_name: str
    owner: RepoOwner
    name: str
    languages_url: str

    @property
    def owner_login(self) -> str:
        return self.owner.login


class LanguageDetail(BaseModel):
    bytes: int


class RepoResult(BaseModel):
    full_name: str
    owner: str
    repository: str
    languages: Dict[str, LanguageDetail]

    @classmethod
    def from_candidate(cls, candidate: RepoCandidate, languages: Dict[str, int]) -> "RepoResult":
        return cls(
            full_name=candidate.full_name,
            owner=candidate.owner_login,
            repository=candidate.name,
            languages={lang: LanguageDetail(bytes=count) for lang, count in languages.items()},
        )


class RepositoriesResponse(BaseModel):
    repositories: List[RepoResult]


class ErrorResponse(BaseModel):
    error: str


class FilterSpec(BaseModel):
    kind: Optional[str] = None
    value: str = ""
