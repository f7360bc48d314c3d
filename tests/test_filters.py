import pytest

from repolang.schemas import FilterSpec, RepoResult
from repolang.services.filters import apply_filter

from .conftest import make_candidate


@pytest.fixture
def repos():
    return [
        RepoResult.from_candidate(make_candidate("alice/a"), {"Go": 10}),
        RepoResult.from_candidate(make_candidate("bob/b"), {"Python": 5}),
        RepoResult.from_candidate(make_candidate("alice/c"), {}),
    ]


def test_language_filter(repos):
    kept = apply_filter(repos, FilterSpec(kind="language", value="Go"))

    assert [r.full_name for r in kept] == ["alice/a"]


def test_language_filter_no_match(repos):
    assert apply_filter(repos, FilterSpec(kind="language", value="Rust")) == []


def test_route_segment_is_not_a_filter_kind(repos):
    assert apply_filter(repos, FilterSpec(kind="lang", value="Python")) == repos


def test_owner_filter_is_case_sensitive(repos):
    kept = apply_filter(repos, FilterSpec(kind="owner", value="alice"))

    assert [r.full_name for r in kept] == ["alice/a", "alice/c"]
    assert apply_filter(repos, FilterSpec(kind="owner", value="Alice")) == []


@pytest.mark.parametrize("spec", [FilterSpec(), FilterSpec(kind="bogus", value="x")])
def test_unknown_or_missing_kind_is_a_no_op(repos, spec):
    assert apply_filter(repos, spec) == repos
