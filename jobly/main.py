"""
Jobly API - FastAPI application.

Companies and the jobs they post, with filtered listings and partial updates.
Run with ``uvicorn jobly.main:app`` or ``python -m jobly.main``.
"""
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from jobly.core.config import settings
from jobly.core.database import close_db, init_db
from jobly.core.exceptions import APIException
from jobly.core.logging import RequestIDMiddleware, get_logger, setup_logging
from jobly.core.rate_limit import limiter
from jobly.api.routes import api_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("starting_app", app_name=settings.app_name, env=settings.environment)
    await init_db()

    yield

    await close_db()
    logger.info("shutting_down")


app = FastAPI(
    title=settings.app_name,
    description="Companies and jobs, with filtered listings and partial updates",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Any] = None,
) -> JSONResponse:
    """Every error body has the same shape: ``{error, message, details}``."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"error": code, "message": message, "details": details}),
    )


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    if exc.status_code >= 500:
        logger.error("api_exception", code=exc.code, message=exc.message)
    else:
        logger.info("request_rejected", code=exc.code, message=exc.message)
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body, path and query validation failures are 400s, like every other bad input."""
    logger.info("request_rejected", code="BAD_REQUEST", error_count=len(exc.errors()))
    return error_response(400, "BAD_REQUEST", "Invalid request data", exc.errors())


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log the full failure; the client only sees the message in debug mode."""
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        path=request.url.path,
        exc_info=True,
    )
    message = str(exc) if settings.debug else "An unexpected error occurred"
    return error_response(500, "INTERNAL_ERROR", message)


app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "companies": f"{settings.api_prefix}/companies",
        "jobs": f"{settings.api_prefix}/jobs",
        "docs": "/docs" if settings.debug else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "jobly.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
