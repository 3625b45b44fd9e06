from __future__ import annotations

import logging

from pydantic import ValidationError

from media_duration.application.models import FailureKind
from media_duration.application.pipeline.base import PipelineContext, BaseStep
from media_duration.core.exceptions import JobFailure
from media_duration.core.pyd_schemas import JobPayload

logger = logging.getLogger(__name__)


class ValidatePayloadStep(BaseStep):
    """Received -> PayloadValidated

    Input:  body (raw job bytes)
    Output: payload, filename
    """

    name = "validate_payload"

    async def run(self, context: PipelineContext) -> None:  # type: ignore[override]
        body = context.input.get("body")
        if isinstance(body, (bytes, bytearray)):
            try:
                body = bytes(body).decode("utf-8")
            except UnicodeDecodeError as e:
                raise JobFailure(FailureKind.MALFORMED_JOB) from e
        if not isinstance(body, str) or not body.strip():
            raise JobFailure(FailureKind.MALFORMED_JOB)

        try:
            payload = JobPayload.model_validate_json(body)
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err.get('loc', [])) or 'body'}: "
                f"{err.get('msg', 'invalid input')}"
                for err in e.errors()
            )
            logger.debug("Rejected job payload: %s", reasons)
            raise JobFailure(FailureKind.MALFORMED_JOB) from e

        context.set("payload", payload)
        context.set("filename", payload.filename)
