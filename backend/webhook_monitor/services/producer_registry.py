"""Idempotent registration of webhook producers."""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from webhook_monitor.db.models import Producer

logger = logging.getLogger(__name__)


def find_producer_by_url(db: Session, url: str) -> Producer | None:
    """Case-insensitive exact match on the producer URL."""
    return db.scalar(select(Producer).where(func.lower(Producer.url) == func.lower(url)))


def register_producer(db: Session, url: str) -> tuple[Producer, bool]:
    """Return the producer for ``url``, creating it on first registration.

    Returns:
        ``(producer, created)``. An existing producer comes back unmodified;
        ``last_accessed`` is only set when the row is created.

    The unique ``lower(url)`` index settles concurrent registrations: the
    losing insert is rolled back and the winner's row is returned.
    """
    existing = find_producer_by_url(db, url)
    if existing is not None:
        return existing, False

    producer = Producer(url=url, last_accessed=datetime.now(timezone.utc))
    db.add(producer)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = find_producer_by_url(db, url)
        if existing is None:
            raise
        logger.info(f"Producer {url} registered concurrently, reusing id {existing.id}")
        return existing, False

    db.refresh(producer)
    logger.info(f"Registered producer {producer.id} for {url}")
    return producer, True


def get_producer(db: Session, producer_id: int) -> Producer | None:
    return db.get(Producer, producer_id)


def list_producers(db: Session) -> list[Producer]:
    return list(db.scalars(select(Producer).order_by(Producer.id)).all())
