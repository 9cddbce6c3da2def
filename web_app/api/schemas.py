"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from tinylink.database.models import Link


class CamelModel(BaseModel):
    """Snake-case fields, camelCase JSON."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class CreateLinkRequest(CamelModel):
    """Request to create a short link.

    Both fields are optional here; the registrar reports missing or bad values
    with its own error types.
    """

    target_url: Optional[str] = Field(None, description="The URL to redirect to")
    code: Optional[str] = Field(None, description="Optional custom code (6-8 alphanumeric characters)")

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"targetUrl": "https://example.com/very/long/path/to/resource"},
                {"targetUrl": "https://github.com/user/repo", "code": "myrepo1"},
            ]
        },
    }


class LinkResponse(CamelModel):
    """A link with its click statistics."""

    code: str
    target_url: str
    clicks: int
    last_clicked: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_link(cls, link: Link) -> "LinkResponse":
        return cls(
            code=link.code,
            target_url=link.target_url,
            clicks=link.clicks,
            last_clicked=link.last_clicked,
            created_at=link.created_at,
        )


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Human readable message")
    type: str = Field(..., description="Stable error identifier")


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool
    version: str
    uptime: int = Field(..., description="Seconds since process start")
    timestamp: datetime
