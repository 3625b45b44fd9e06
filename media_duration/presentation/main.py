import os
import logging

from fastapi import FastAPI, APIRouter
import uvicorn
from contextlib import asynccontextmanager

from media_duration.application.use_cases.handle_job import JobHandler
from media_duration.core.config import settings
from media_duration.core.exceptions import (
    JobFailure,
    general_exception_handler,
    job_failure_exception_handler,
)
from media_duration.core.logging_config import configure_logging
from media_duration.core.middleware import RequestLoggingMiddleware
from media_duration.core.monitoring import HealthChecker
from media_duration.presentation.api.v1.dependencies.jobs import build_job_handler
from media_duration.presentation.api.v1.routers import health
from media_duration.presentation.api.v1.routers import jobs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    configure_logging(settings)
    logger.info("Starting Media Duration API...")
    if getattr(app.state, "job_handler", None) is None:
        # Fails fast with ConfigurationError when ffprobe is missing
        app.state.job_handler = build_job_handler()
    yield
    logger.info("Shutting down Media Duration API...")


def create_application(job_handler: JobHandler | None = None) -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.job_handler = job_handler
    app.state.health_checker = HealthChecker(settings.ffprobe_binary_path)

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(JobFailure, job_failure_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(jobs.router, tags=["jobs"])
    api_v1.include_router(health.router)
    app.include_router(api_v1)

    return app


def main() -> None:
    dev_mode = os.getenv("DEV_MODE", "false").lower() == "true"
    uvicorn.run(
        "media_duration.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=dev_mode,
    )


# Create application instance
app = create_application()

if __name__ == "__main__":
    main()
