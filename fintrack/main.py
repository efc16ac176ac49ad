"""
FastAPI application factory
"""
import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from fintrack.api.v1 import auth, categories, dashboard, expense, export, income, users
from fintrack.auth import CredentialService
from fintrack.config import Settings, get_settings
from fintrack.domain.errors import (
    Conflict,
    DomainError,
    InternalError,
    NotFound,
    NotFoundOrUnauthorized,
    Unauthorized,
    ValidationError,
)
from fintrack.infrastructure.db.session import (
    check_db_connection,
    create_engine_for,
    create_session_factory,
    init_db,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Checked in order, first match wins
_ERROR_STATUS = [
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (NotFoundOrUnauthorized, status.HTTP_404_NOT_FOUND),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
    (Unauthorized, status.HTTP_401_UNAUTHORIZED),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def status_for(exc: DomainError) -> int:
    for exc_type, code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "invalid request body"
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    if field:
        return f"{field}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "invalid request")


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Logs unexpected exceptions and answers with an opaque 500"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        code = status_for(exc)
        if isinstance(exc, InternalError):
            logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc.detail)
        return error_response(code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))


def create_app(settings: Settings | None = None, init_database: bool = True) -> FastAPI:
    """
    Application factory - creates and configures the FastAPI app

    Args:
        settings: explicit settings (default: from environment)
        init_database: create tables and seed categories on startup

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    engine = create_engine_for(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_database:
            init_db(engine)
            logger.info("Database initialized")
        logger.info("Environment: %s", settings.ENVIRONMENT)
        yield
        engine.dispose()

    app = FastAPI(
        title="FinTrack",
        description="Personal income and expense tracker. All endpoints are served under `/api/v1`.",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Process-wide, immutable after startup
    app.state.settings = settings
    app.state.credentials = CredentialService(settings.token_config())
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(ErrorLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(income.router)
    app.include_router(expense.router)
    app.include_router(dashboard.router)
    app.include_router(export.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (checks the database)"""
        check_db_connection(app.state.engine)
        return "ok"

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "fintrack.main:app",
        host=_settings.SERVER_HOST,
        port=_settings.SERVER_PORT,
        reload=_settings.DEBUG,
    )
