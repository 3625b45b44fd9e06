from fastapi import Request

from media_duration.application.use_cases.handle_job import JobHandler
from media_duration.application.use_cases.resolve_duration import DurationResolver
from media_duration.core.config import Settings, settings as default_settings
from media_duration.infrastructure.adapters.bundles.duration import (
    get_duration_adapter_bundle,
)


def build_job_handler(
    *, app_settings: Settings | None = None, binary_path: str | None = None
) -> JobHandler:
    """Compose the JobHandler at Presentation layer using adapter providers."""
    cfg = app_settings or default_settings
    adapters = get_duration_adapter_bundle(app_settings=cfg, binary_path=binary_path)
    resolver = DurationResolver(
        adapters.media_probe, untrusted_formats=cfg.untrusted_formats_set
    )
    return JobHandler(resolver)


def get_job_handler(request: Request) -> JobHandler:
    """Handler composed once during application startup."""
    return request.app.state.job_handler
