"""Access guard middleware.

Every route is protected unless listed in ``app.state.public_paths``. The
guard resolves the bearer token to an ``Identity`` and stores it on
``request.state.identity`` before the route runs.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from bookshelf.services.auth import AuthService, Identity
from bookshelf.services.exceptions import UnauthorizedError
from bookshelf.services.users import UserRepository

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def resolve_identity(app: FastAPI, token: str) -> Identity:
    """Verify a token against the app's codec and credential store."""
    with app.state.session_factory() as db:
        auth_service = AuthService(
            UserRepository(db), app.state.password_hasher, app.state.token_codec
        )
        return auth_service.verify_identity(token)


def _unauthorized() -> JSONResponse:
    error = UnauthorizedError()
    return JSONResponse(
        status_code=error.status_code,
        content={"detail": error.message},
        headers=error.headers,
    )


async def access_guard(request: Request, call_next):
    """Reject requests to protected routes that lack a valid bearer token."""
    path = request.url.path.rstrip("/") or "/"
    if request.method == "OPTIONS" or path in request.app.state.public_paths:
        return await call_next(request)

    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        return _unauthorized()

    try:
        identity = await run_in_threadpool(resolve_identity, request.app, token)
    except UnauthorizedError:
        return _unauthorized()
    except SQLAlchemyError:
        logger.exception("Database error while verifying access token")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    request.state.identity = identity
    return await call_next(request)
