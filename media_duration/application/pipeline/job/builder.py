from __future__ import annotations

from media_duration.application.pipeline.base import (
    Pipeline,
    PipelineFactory,
    make_logging_middleware,
)
from media_duration.application.pipeline.job.steps.validate_payload import (
    ValidatePayloadStep,
)
from media_duration.application.pipeline.job.steps.validate_file import ValidateFileStep
from media_duration.application.pipeline.job.steps.resolve_duration import (
    ResolveDurationStep,
)
from media_duration.application.use_cases.resolve_duration import DurationResolver


def build_job_pipeline(
    resolver: DurationResolver,
    *,
    enable_logging_middleware: bool = True,
) -> Pipeline:

    middlewares = [make_logging_middleware()] if enable_logging_middleware else []
    factory = PipelineFactory(middlewares=middlewares)
    factory.add(ValidatePayloadStep())
    factory.add(ValidateFileStep())
    factory.add(ResolveDurationStep(resolver))

    return factory.build()
