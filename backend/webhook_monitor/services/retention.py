"""Retention purge of aged delivery records."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session

from webhook_monitor.db.models import RequestDetails

logger = logging.getLogger(__name__)

EARLIEST_CUTOFF = datetime.min.replace(tzinfo=timezone.utc)


def retention_cutoff(days_to_keep: int, now: datetime | None = None) -> datetime:
    """Records strictly older than the returned instant are purged."""
    if days_to_keep < 0:
        raise ValueError(f"days_to_keep must be >= 0, got {days_to_keep}")
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    try:
        return now.astimezone(timezone.utc) - timedelta(days=days_to_keep)
    except OverflowError:
        # Windows reaching past year 1 keep everything
        return EARLIEST_CUTOFF


def purge_request_records(
    db: Session,
    producer_id: int,
    days_to_keep: int,
    now: datetime | None = None,
) -> int:
    """Delete a producer's records older than ``days_to_keep`` days.

    Returns:
        Number of rows deleted.
    """
    cutoff = retention_cutoff(days_to_keep, now)
    stmt = delete(RequestDetails).where(
        RequestDetails.timestamp < cutoff,
        RequestDetails.producer_id == producer_id,
    ).execution_options(synchronize_session=False)
    result = db.execute(stmt)
    db.commit()

    deleted = result.rowcount or 0
    logger.info(
        f"Purged {deleted} request record(s) for producer {producer_id} "
        f"older than {cutoff.isoformat()}"
    )
    return deleted
