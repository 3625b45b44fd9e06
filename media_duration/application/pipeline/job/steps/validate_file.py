from __future__ import annotations

import os

from media_duration.application.models import FailureKind
from media_duration.application.pipeline.base import PipelineContext, BaseStep
from media_duration.core.exceptions import JobFailure


class ValidateFileStep(BaseStep):
    """PayloadValidated -> FileValidated

    Input:  filename
    Output: media_path
    """

    name = "validate_file"
    required_keys = ["filename"]

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        path = context.get("filename")

        if not os.path.exists(path):
            raise JobFailure(FailureKind.FILE_NOT_FOUND)

        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            raise JobFailure(FailureKind.FILE_UNREADABLE)

        context.set("media_path", path)
