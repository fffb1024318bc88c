"""
Application factory for the notes backend.

create_app() wires configuration, the database handle, the password hasher and
the token service onto ``app.state``, installs middleware and error handlers,
and mounts the routers. The access guard is applied at router level to
``/user`` and ``/notes``.
"""
import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_backend.api.config import Settings
from notes_backend.api.guard import require_auth
from notes_backend.api.middleware import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    PreflightMiddleware,
    RequestLoggingMiddleware,
)
from notes_backend.api.routers import auth, notes, users
from notes_backend.security import PasswordHasher, TokenService
from notes_database import Database

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def _format_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(messages) or "invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as {"error": "..."}."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _format_validation_error(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "internal server error"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not set; every token operation will fail")
    # An unreachable database stops startup here.
    app.state.database.create_all()
    logger.info("Notes backend ready, API under '%s'", settings.api_prefix or "/")
    yield
    app.state.database.dispose()
    logger.info("Notes backend stopped")


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Builds the FastAPI application. Tests pass their own settings and database."""
    settings = settings or Settings.from_env()
    database = database or Database(settings.resolved_database_url(), echo=settings.sql_echo)

    app = FastAPI(
        title="Notes Backend API",
        description="Multi-user notes with password login and bearer tokens.",
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Authentication", "description": "User registration and login"},
            {"name": "User", "description": "Authenticated user profile"},
            {"name": "Notes", "description": "Create, view, update and delete notes"},
        ],
    )
    app.state.settings = settings
    app.state.database = database
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.jwt_ttl_hours),
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )
    # Outermost: every OPTIONS gets the fixed preflight answer.
    app.add_middleware(PreflightMiddleware)
    register_exception_handlers(app)

    @app.get("/", summary="Health Check", tags=["General"])
    def health_check():
        """Simple health check endpoint."""
        return {"message": "Healthy"}

    guarded = [Depends(require_auth)]
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(users.router, prefix=settings.api_prefix, dependencies=guarded)
    app.include_router(notes.router, prefix=settings.api_prefix, dependencies=guarded)
    return app


def run() -> None:
    """Starts the HTTP listener on the configured host and port."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Starting server on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
