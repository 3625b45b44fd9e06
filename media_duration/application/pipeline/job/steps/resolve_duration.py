from __future__ import annotations

import logging

from media_duration.application.pipeline.base import PipelineContext, BaseStep
from media_duration.application.use_cases.resolve_duration import DurationResolver

logger = logging.getLogger(__name__)


class ResolveDurationStep(BaseStep):
    """FileValidated -> Resolved

    Input:  media_path
    Output: resolution (DurationSuccess or DurationFailure, as returned)
    """

    name = "resolve_duration"
    required_keys = ["media_path"]

    def __init__(self, resolver: DurationResolver) -> None:
        self._resolver = resolver

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        path = context.get("media_path")
        logger.info('Calculating duration of "%s" ... ', path)
        context.set("resolution", await self._resolver.resolve(path))
