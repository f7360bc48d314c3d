import pytest
from pydantic import ValidationError

from repolang.config import Settings


def test_defaults(monkeypatch):
    for name in ("GITHUB_TOKEN", "GITHUB_PER_PAGE", "MAX_CONCURRENCY", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.github_token is None
    assert str(settings.github_base_url).startswith("https://api.github.com")
    assert settings.github_per_page == 100
    assert settings.github_page == 1
    assert settings.port == 5000


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")
    monkeypatch.setenv("MAX_CONCURRENCY", "32")
    monkeypatch.setenv("BATCH_TIMEOUT_SECONDS", "7.5")

    settings = Settings()

    assert settings.github_token == "from-env"
    assert settings.max_concurrency == 32
    assert settings.batch_timeout_seconds == 7.5


def test_page_size_is_capped(monkeypatch):
    monkeypatch.setenv("GITHUB_PER_PAGE", "500")

    with pytest.raises(ValidationError):
        Settings()
