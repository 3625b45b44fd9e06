"""
Process-wide logging setup shared by the API and the worker
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from media_duration.core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure logging: both to console and, if configured, to a rotating file."""
    log_handlers = [logging.StreamHandler()]
    if settings.log_file:
        log_dir = os.path.dirname(settings.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_file_max_bytes,
                backupCount=settings.log_file_backup_count,
                encoding="utf-8",
            )
        )
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
        datefmt=settings.log_date_format,
        handlers=log_handlers,
        force=True,
    )

    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
