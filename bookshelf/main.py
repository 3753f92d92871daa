"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from bookshelf.api import auth, books, users
from bookshelf.api.guard import access_guard
from bookshelf.config import Settings, get_settings
from bookshelf.database import create_db_engine, create_session_factory
from bookshelf.services.exceptions import BookshelfError
from bookshelf.services.security import PasswordHasher, TokenCodec

logger = logging.getLogger(__name__)


async def bookshelf_error_handler(request: Request, exc: BookshelfError):
    """Render service errors as ``{"detail": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=exc.headers,
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Hide storage errors behind a generic 500."""
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """Build the application and everything it shares across requests."""
    settings = settings or get_settings()
    owns_engine = engine is None
    if engine is None:
        engine = create_db_engine(settings.database_url)
    logging.getLogger("bookshelf").setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        yield
        if owns_engine:
            engine.dispose()

    app = FastAPI(
        title="Bookshelf API",
        description="User registration, token login and book records",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_codec = TokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_expiration_minutes),
    )
    app.state.public_paths = {
        "/health",
        f"{settings.api_prefix}/auth/register",
        f"{settings.api_prefix}/auth/login",
        "/docs",
        "/docs/oauth2-redirect",
        "/redoc",
        "/openapi.json",
    }

    app.add_exception_handler(BookshelfError, bookshelf_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    # Added before CORS so CORS stays outermost and answers preflights itself
    app.middleware("http")(access_guard)

    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Register routers
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(books.router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app
