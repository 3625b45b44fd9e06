from typing import Optional

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    error: str
    details: str
    error_code: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: ErrorDetail
