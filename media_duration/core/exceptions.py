"""
Custom exception handlers and error types
"""

from fastapi import Request
from fastapi.responses import JSONResponse
import logging
import traceback
from typing import Optional

from media_duration.application.models import FailureKind

logger = logging.getLogger(__name__)


class MediaDurationError(Exception):
    """Base exception for media duration errors"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class JobFailure(MediaDurationError):
    """Terminal failure of a single duration job.

    Args:
        kind (FailureKind): Failure category reported to the caller
        message (str): Human-readable message sent through the failure channel
    Example:
        raise JobFailure(FailureKind.FILE_NOT_FOUND, "Media file was not found.")
    """

    def __init__(self, kind: FailureKind, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message or kind.message, kind.value)


class ConfigurationError(MediaDurationError):
    """Exception raised when configuration is invalid"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key


async def job_failure_exception_handler(request: Request, exc: JobFailure):
    """Handle duration job failures"""
    logger.debug(f"Duration job failed: {exc.message} ({exc.error_code})")
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "error": "Duration job failed",
                "details": exc.message,
                "error_code": exc.error_code,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error(f"Unexpected error: {type(exc).__name__}: {str(exc)}")
    logger.error(f"Traceback: {traceback.format_exc()}")

    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Internal server error",
                "details": "An unexpected error occurred",
            }
        },
    )
