"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.database import engine
from app.core.errors import (
    AccountError,
    AuthenticationFailure,
    ErrorAccumulator,
    is_unexpected,
)
from app.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # Creates missing tables (and the email/username unique indexes); no migrations.
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Accounts API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AccountError)
async def handle_account_error(request: Request, exc: AccountError) -> JSONResponse:
    """Render every workflow failure as {"errors": [...]}; hide internals of unexpected ones."""
    if is_unexpected(exc):
        logger.error(
            "Request failed",
            exc_info=exc,
            extra={
                "path": request.url.path,
                "error_type": type(exc).__name__,
                "reason": exc.message[:500],
            },
        )
        body = ErrorAccumulator(["Internal server error"]).to_response()
        return JSONResponse(status_code=exc.status_code, content=body)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationFailure) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.errors.to_response(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/query values of the wrong type get the same error shape as field validation."""
    errors = ErrorAccumulator()
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(loc) or "Request body"
        errors.add(f"{field}: {err.get('msg', 'is invalid')}")
    return JSONResponse(status_code=400, content=errors.to_response())


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Accounts API"}
