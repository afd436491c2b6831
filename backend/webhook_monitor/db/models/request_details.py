"""SQLAlchemy model for one logged webhook delivery."""

from sqlalchemy import JSON, BigInteger, Column, Float, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import DateTime

from webhook_monitor.db.base import Base


class RequestDetails(Base):
    __tablename__ = "request_details"

    id = Column(Integer, primary_key=True)
    # Not a foreign key: deliveries may reference producers that were never registered
    producer_id = Column(BigInteger, nullable=False)
    url = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    http_method = Column(String(16), nullable=False)
    headers = Column(JSON().with_variant(JSONB(), "postgresql"))
    response_status = Column(Integer, nullable=False)
    response_time = Column(Float, nullable=False)

    __table_args__ = (
        Index("ix_request_details_producer_timestamp", producer_id, timestamp),
    )
