"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from listing_scraper.api.routes import health, jobs
from listing_scraper.application.interfaces.job_store import JobNotFoundError
from listing_scraper.application.use_cases.submit_scrape_job import JobSubmissionError

logger = structlog.get_logger(__name__)

ENDPOINTS = (
    "POST /scrape",
    "GET /job/{jobId}",
    "GET /jobs",
    "GET /health",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("scraper_api_starting", endpoints=list(ENDPOINTS))
    yield
    logger.info("scraper_api_stopping")


async def _submission_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


def _describe_validation_error(error: dict[str, Any]) -> str:
    field = ".".join(str(part) for part in error["loc"] if part != "body")
    return f"{field}: {error['msg']}" if field else error["msg"]


async def _validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Malformed request bodies share the {"error": ...} shape of other input errors
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(_describe_validation_error(error) for error in errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message or "Invalid request"},
    )


async def _job_not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Job not found"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Listing Scraper",
        description="Asynchronous scrape jobs that extract listings from paginated result pages.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(JobSubmissionError, _submission_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(JobNotFoundError, _job_not_found_handler)

    app.include_router(health.router)
    app.include_router(jobs.router)

    return app


app = create_app()
