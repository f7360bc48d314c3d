from functools import lru_cache
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    github_token: Optional[str] = Field(default=None, alias="GITHUB_TOKEN")
    github_base_url: HttpUrl = Field(
        default="https://api.github.com", alias="GITHUB_BASE_URL"
    )
    github_proxy: Optional[str] = Field(default=None, alias="GITHUB_PROXY")
    # GitHub caps page size at 100
    github_per_page: int = Field(default=100, ge=1, le=100, alias="GITHUB_PER_PAGE")
    github_page: int = Field(default=1, ge=1, alias="GITHUB_PAGE")
    request_timeout_seconds: float = Field(default=20, gt=0, alias="REQUEST_TIMEOUT_SECONDS")
    batch_timeout_seconds: float = Field(default=60, gt=0, alias="BATCH_TIMEOUT_SECONDS")
    max_concurrency: int = Field(default=16, ge=1, alias="MAX_CONCURRENCY")
    port: int = Field(default=5000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"  # ignore unrelated env vars to avoid validation errors


@lru_cache
def get_settings() -> Settings:
    return Settings()
