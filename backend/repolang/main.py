import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .config import Settings, get_settings
from .datasources.base import DataSource
from .datasources.github_adapter import GitHubAdapter
from .errors import BatchError, GitHubError
from .logging_setup import setup_logging
from .schemas import ErrorResponse, FilterSpec, RepositoriesResponse
from .services.repo_service import RepositoryService


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(settings: Optional[Settings] = None, source: Optional[DataSource] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        logger.info("Initializing app")
        if not settings.github_token:
            logger.error("GITHUB_TOKEN env var not set")
            raise RuntimeError("GITHUB_TOKEN environment variable not set")

        owned = None
        if source is None:
            owned = GitHubAdapter.from_settings(settings)
        app.state.service = RepositoryService(
            source or owned,
            max_concurrency=settings.max_concurrency,
            batch_timeout=settings.batch_timeout_seconds,
        )
        try:
            yield
        finally:
            if owned is not None:
                await owned.aclose()

    app = FastAPI(title="Repository Languages", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(BatchError)
    async def batch_error_handler(request: Request, exc: BatchError):
        if isinstance(exc.cause, asyncio.TimeoutError):
            return error_response(504, "Timed out fetching repository languages")
        return error_response(502, str(exc))

    @app.exception_handler(GitHubError)
    async def github_error_handler(request: Request, exc: GitHubError):
        logger.error(f"Fail to fetch repositories: {exc}")
        return error_response(502, str(exc))

    async def respond(request: Request, spec: Optional[FilterSpec] = None) -> RepositoriesResponse:
        service: RepositoryService = request.app.state.service
        repos = await service.list_repositories(spec)
        return RepositoriesResponse(repositories=repos)

    @app.get("/ping")
    async def ping():
        return {"status": "pong"}

    @app.get("/health")
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/repos", response_model=RepositoriesResponse)
    async def repositories(request: Request):
        return await respond(request)

    @app.get("/repos/lang/{lang}", response_model=RepositoriesResponse)
    async def repositories_by_language(request: Request, lang: str):
        return await respond(request, FilterSpec(kind="language", value=lang))

    @app.get("/repos/owner/{owner}", response_model=RepositoriesResponse)
    async def repositories_by_owner(request: Request, owner: str):
        return await respond(request, FilterSpec(kind="owner", value=owner))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
