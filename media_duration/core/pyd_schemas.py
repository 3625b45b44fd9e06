from __future__ import annotations

from pydantic import BaseModel, NonNegativeInt, constr, field_validator


class JobPayload(BaseModel):
    """Inbound job body: {"filename": "/absolute/path/to/file"}

    The filename is kept exactly as sent; surrounding spaces are part of the path.
    """

    filename: constr(min_length=1)

    @field_validator("filename")
    @classmethod
    def reject_blank_filename(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("filename must not be blank")
        return v


class DurationResponse(BaseModel):
    """Outbound success body: {"duration": 12345}"""

    duration: NonNegativeInt
