import json
import logging

from media_duration.application.interfaces.job import IJob
from media_duration.application.models import (
    Acknowledgement,
    DurationFailure,
    DurationSuccess,
    Resolution,
)
from media_duration.application.pipeline.base import PipelineContext
from media_duration.application.pipeline.job.builder import build_job_pipeline
from media_duration.application.use_cases.resolve_duration import DurationResolver
from media_duration.core.exceptions import JobFailure

logger = logging.getLogger(__name__)


class JobHandler:
    """Validate one job, resolve its duration and acknowledge it exactly once.

    Expects a body in the form:
    {
      "filename": "/absolute/path/to/file"
    }
    and answers {"duration": 12345} on success, or a failure message.
    """

    def __init__(self, resolver: DurationResolver) -> None:
        self._resolver = resolver

    async def handle(self, job: IJob) -> Acknowledgement:
        ctx = PipelineContext(input={"body": job.body})
        # A fresh pipeline per job keeps step state job-scoped
        pipeline = build_job_pipeline(self._resolver)
        try:
            result = await pipeline.execute(ctx)
            resolution: Resolution = result["context"].get("resolution")
        except JobFailure as e:
            resolution = DurationFailure(kind=e.kind, message=e.message)

        return self._acknowledge(job, resolution, ctx.get_run_id())

    def _acknowledge(self, job: IJob, resolution: Resolution, run_id) -> Acknowledgement:
        if isinstance(resolution, DurationSuccess):
            payload = json.dumps({"duration": resolution.duration_seconds}).encode(
                "utf-8"
            )
            logger.info("[run_id=%s] done", run_id)
            job.send_success(payload)
            return Acknowledgement(success=True, payload=payload)

        logger.error("[run_id=%s] %s", run_id, resolution.message)
        job.send_fail(resolution.message)
        return Acknowledgement(
            success=False, message=resolution.message, kind=resolution.kind
        )
