"""SQLAlchemy model for registered webhook producers."""

from sqlalchemy import Column, Index, Integer, Text, func
from sqlalchemy.types import DateTime

from webhook_monitor.db.base import Base


class Producer(Base):
    __tablename__ = "producer"

    id = Column(Integer, primary_key=True)
    url = Column(Text, nullable=False)
    last_accessed = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_producer_url_lower", func.lower(url), unique=True),)
