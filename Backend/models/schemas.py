from typing import Any, Optional

from pydantic import BaseModel


# Request fields accept any JSON value: handlers only check presence,
# then read values as text with as_text()

class SummaryRequest(BaseModel):
    transcript: Optional[Any] = None
    instruction: Optional[Any] = None


class SummaryResponse(BaseModel):
    summary: str


class EmailRequest(BaseModel):
    recipients: Optional[Any] = None
    subject: Optional[Any] = None
    summary: Optional[Any] = None


class EmailResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


def as_text(value: Any) -> str:
    """Render a present (truthy) request value as text; absent values become ''."""
    return str(value) if value else ""
