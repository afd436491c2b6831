"""Pydantic models describing Producer payloads."""

from datetime import datetime

from pydantic import Field, field_serializer, field_validator

from webhook_monitor.api.schemas.common import CamelModel, as_utc


class ProducerCreate(CamelModel):
    url: str = Field(..., description="Callback URL, matched case-insensitively")

    @field_validator("url")
    @classmethod
    def url_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("url must not be empty")
        return v


class ProducerRead(CamelModel):
    id: int
    url: str
    last_accessed: datetime

    @field_serializer("last_accessed")
    def serialize_last_accessed(self, value: datetime) -> str:
        """Convert datetime to ISO format string."""
        return as_utc(value).isoformat()
