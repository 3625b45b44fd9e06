import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from media_duration.application.use_cases.handle_job import JobHandler
from media_duration.core.exceptions import JobFailure
from media_duration.core.pyd_schemas import DurationResponse
from media_duration.presentation.api.v1.dependencies.jobs import get_job_handler
from media_duration.presentation.api.v1.schemas.jobs import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs")


class HttpJob:
    """Job delivered in an HTTP request body; the acknowledgement becomes the response."""

    def __init__(self, body: bytes) -> None:
        self._body = body
        self.payload: Optional[bytes] = None
        self.failure: Optional[str] = None

    @property
    def body(self) -> bytes:
        return self._body

    def send_success(self, payload: bytes) -> None:
        self.payload = payload

    def send_fail(self, message: str) -> None:
        self.failure = message


@router.post(
    "/duration",
    response_model=DurationResponse,
    responses={422: {"model": ErrorResponse}},
)
async def calculate_duration(
    request: Request,
    handler: JobHandler = Depends(get_job_handler),
):
    """Calculate the duration of the media file named in the raw JSON body."""
    job = HttpJob(await request.body())
    ack = await handler.handle(job)
    if not ack.success:
        raise JobFailure(ack.kind, ack.message)
    return DurationResponse.model_validate(json.loads(job.payload))
