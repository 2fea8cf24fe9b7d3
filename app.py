"""
Token Ledger API application setup.

- Registers route modules from `routes/*` under /api
- Opens a correlation scope per request (X-Correlation-ID)
- Maps the application exception hierarchy to HTTP status codes
"""

import logging

from dotenv import load_dotenv  # type: ignore
from fastapi import FastAPI, Request  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore
from sqlalchemy.exc import SQLAlchemyError  # type: ignore
from starlette.middleware.cors import CORSMiddleware  # type: ignore

from logging_config import configure_logging

# ───────────────────── env / init ─────────────────────
load_dotenv()
configure_logging()

from core.correlation import correlation_scope  # noqa: E402
from core.db import init_schema  # noqa: E402
from core.dependencies import get_settings  # noqa: E402
from shared.constants import CORRELATION_HEADER  # noqa: E402
from shared.exceptions import (  # noqa: E402
    ConcurrentModificationError,
    ConfigurationError,
    EntityNotFoundError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateTransitionError,
    PersistenceUnavailableError,
    TokenLedgerError,
    UnauthorizedError,
    create_error_response,
)

from routes.auth import router as auth_router  # noqa: E402
from routes.health import router as health_router  # noqa: E402
from routes.lending import router as lending_router  # noqa: E402
from routes.tokens import router as tokens_router  # noqa: E402

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Meal token ledger: token conversion and lending records",
)

app.include_router(health_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(lending_router, prefix="/api")
app.include_router(tokens_router, prefix="/api")

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=settings.auth.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[CORRELATION_HEADER],
)


@app.middleware("http")
async def correlation_middleware(request: Request, call_next):
    incoming = request.headers.get(CORRELATION_HEADER)
    with correlation_scope(incoming) as correlation_id:
        response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


# Most specific first
_STATUS_BY_ERROR = (
    (InvalidArgumentError, 400),
    (UnauthorizedError, 401),
    (ForbiddenError, 403),
    (EntityNotFoundError, 404),
    (ConcurrentModificationError, 409),
    (InvalidStateTransitionError, 409),
    (PersistenceUnavailableError, 503),
    (ConfigurationError, 500),
)


def status_for(exc: TokenLedgerError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


@app.exception_handler(TokenLedgerError)
async def token_ledger_error_handler(request: Request, exc: TokenLedgerError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    # Internal details stay out of 5xx bodies
    return JSONResponse(
        status_code=status,
        content=create_error_response(exc, include_details=status < 500),
    )


@app.on_event("startup")
def _startup() -> None:
    errors = settings.validate()
    for error in errors:
        logger.error(f"Configuration error: {error}")
    if settings.is_production and errors:
        raise ConfigurationError("Refusing to start with invalid production configuration")
    try:
        ready = init_schema()
    except SQLAlchemyError as e:
        logger.error(f"Database schema setup failed: {e}")
        return
    if ready:
        logger.info("Database schema ready")
    else:
        logger.warning("DATABASE_URL not configured; persistence is unavailable")
