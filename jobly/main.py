"""
Jobly API - FastAPI Application Entry Point.

Job board over companies and the jobs they post. Every error leaves as
``{"error": code, "message": ..., "details": ...}``.
"""
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobly.core.config import settings
from jobly.core.database import close_db, init_db
from jobly.core.exceptions import APIException
from jobly.core.logging import RequestIDMiddleware, get_logger, setup_logging
from jobly.api.routes import api_router

logger = get_logger(__name__)


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Any] = None,
) -> JSONResponse:
    content = {"error": code, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


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
    description="Job board API over companies and their job postings",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are client errors: 400, not 422."""
    return error_response(
        400,
        "VALIDATION_ERROR",
        "Invalid request",
        jsonable_encoder(exc.errors()),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Storage and other unexpected failures: logged in full, opaque 500 to the client."""
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )
    message = str(exc) if settings.debug else "An unexpected error occurred"
    return error_response(500, "internal_error", message)


app.include_router(api_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("jobly.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
