from typing import Callable, Dict, List

from ..schemas import FilterSpec, RepoResult


def _has_language(repo: RepoResult, value: str) -> bool:
    return value in repo.languages


def _owned_by(repo: RepoResult, value: str) -> bool:
    return repo.owner == value


FILTERS: Dict[str, Callable[[RepoResult, str], bool]] = {
    "language": _has_language,
    "owner": _owned_by,
}


def apply_filter(repos: List[RepoResult], spec: FilterSpec) -> List[RepoResult]:
    """Keep the repositories matching ``spec``.

    No kind, or a kind without a registered predicate, means no filtering.
    """
    predicate = FILTERS.get(spec.kind) if spec.kind else None
    if predicate is None:
        return repos
    return [repo for repo in repos if predicate(repo, spec.value)]
