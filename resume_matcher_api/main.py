"""Main FastAPI application for the Resume Matcher service."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import analyze_router, auth_router, feedback_router, health_router, uploads_router
from .config import settings
from .core import SessionManager, TokenCodec
from .storage import init_database

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup and shutdown."""
    logger.info("Starting Resume Matcher service...")
    logger.info(f"Service version: {app.version}")
    logger.info(f"Host: {settings.service_host}:{settings.service_port}")

    db = await init_database()
    logger.info("Database initialized")

    manager = SessionManager(
        db,
        TokenCodec(settings.secret_key, algorithm=settings.jwt_algorithm),
        session_ttl=timedelta(days=settings.session_expire_days),
    )
    await manager.purge_expired()

    logger.info(
        f"Rate limit: {settings.max_queries_per_day} analyses per "
        f"{settings.rate_limit_window_hours}h rolling window"
    )
    logger.info("Resume Matcher service started successfully")

    yield

    logger.info("Shutting down Resume Matcher service...")
    await db.disconnect()
    logger.info("Resume Matcher service stopped")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 Bad Request."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors server-side and return a generic 500."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app() -> FastAPI:
    """Build the FastAPI application with routers and handlers registered."""
    app = FastAPI(
        title="Resume Matcher API",
        description="""
REST API that scores resumes against job descriptions with Google Gemini.

## Authentication

`POST /auth/signup` or `POST /auth/login` returns a token. Send it on every
protected request as `Authorization: Bearer <token>`. Tokens are valid for
7 days; `POST /auth/logout` revokes the session immediately.

## Quota

Each user may run a limited number of analyses in a rolling 24-hour window
(5 by default). `GET /auth/me` and every analysis response report the
current `rate_limit` status.

## API Endpoints

- `POST /auth/signup`, `POST /auth/login`, `POST /auth/logout`, `GET /auth/me`
- `POST /upload`, `GET /upload` - resume files
- `POST /analyze`, `GET /analyze`, `GET /analyze/models` - analyses
- `POST /feedback`, `GET /feedback` - product feedback
- `GET /health`, `GET /version`
""",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(uploads_router)
    app.include_router(analyze_router)
    app.include_router(feedback_router)

    return app


app = create_app()


def main() -> None:
    """Main entry point for running the service."""
    import uvicorn

    uvicorn.run(
        "resume_matcher_api.main:app",
        host=settings.service_host,
        port=settings.service_port,
        workers=settings.service_workers,
        log_level=settings.log_level,
        reload=False,
    )


if __name__ == "__main__":
    main()
