"""Append-only persistence of inbound webhook deliveries."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from webhook_monitor.api.schemas.request_details import RequestDetailsCreate
from webhook_monitor.db.models import RequestDetails

logger = logging.getLogger(__name__)


def log_request(db: Session, payload: RequestDetailsCreate) -> RequestDetails:
    """Persist one delivery record and return it with its generated id.

    ``producer_id`` is stored as given; it is not checked against the
    producer table.
    """
    record = RequestDetails(
        producer_id=payload.producer_id,
        url=payload.url,
        timestamp=payload.timestamp,
        http_method=payload.http_method,
        headers=payload.headers,
        response_status=payload.response_status,
        response_time=payload.response_time,
    )
    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info(
        f"Logged {record.http_method} delivery {record.id} for producer {record.producer_id}"
    )
    return record


def get_request(db: Session, request_id: int) -> RequestDetails | None:
    return db.get(RequestDetails, request_id)


def list_requests(
    db: Session,
    producer_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[RequestDetails]:
    """Return delivery records newest first, optionally for one producer."""
    query = select(RequestDetails)
    if producer_id is not None:
        query = query.where(RequestDetails.producer_id == producer_id)
    query = (
        query.order_by(RequestDetails.timestamp.desc(), RequestDetails.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(db.scalars(query).all())
