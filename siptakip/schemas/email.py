"""Bulk marketing e-mail schemas."""

from pydantic import BaseModel, Field

from siptakip.schemas.common import RequestModel


class EmailSendRequest(RequestModel):
    emails: list[str] = Field(min_length=1)
    subject: str | None = None
    custom_html: str | None = None


class EmailResult(BaseModel):
    email: str
    success: bool
    error: str | None = None


class EmailSendResponse(BaseModel):
    message: str
    sent: int
    failed: int
    results: list[EmailResult]


class EmailTemplateResponse(BaseModel):
    subject: str
    html: str
