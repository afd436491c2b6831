"""Pydantic models describing logged webhook deliveries."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_serializer, field_validator

from webhook_monitor.api.schemas.common import CamelModel, as_utc
from webhook_monitor.api.schemas.purge import MAX_PRODUCER_ID


class RequestDetailsBase(CamelModel):
    producer_id: int = Field(
        ..., ge=0, le=MAX_PRODUCER_ID, description="Producer the delivery belongs to"
    )
    url: str
    timestamp: datetime
    http_method: str = Field(..., min_length=1, max_length=16)
    # Stored as-is; see services.header_decoder for the accepted shapes
    headers: Any = None
    response_status: int = Field(..., ge=0)
    response_time: float


class RequestDetailsCreate(RequestDetailsBase):
    """Schema for POST /request bodies."""

    @field_validator("timestamp")
    @classmethod
    def timestamp_to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class RequestDetailsRead(RequestDetailsBase):
    id: int

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        """Convert datetime to ISO format string."""
        return as_utc(value).isoformat()
