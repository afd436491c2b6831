"""Retention purge endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from webhook_monitor.api.dependencies.db import get_session
from webhook_monitor.api.schemas.purge import PurgeParams
from webhook_monitor.services.retention import purge_request_records

logger = logging.getLogger(__name__)
router = APIRouter()

PURGED_COUNT_HEADER = "X-Purged-Count"


@router.delete(
    "/purge",
    summary="Purge aged request records for a producer",
)
async def purge(
    days_to_keep: str | None = Query(None, alias="DaysToKeep"),
    producer_id: str | None = Query(None, alias="ProducerId"),
    db: Session = Depends(get_session),
) -> JSONResponse:
    """Delete a producer's records older than DaysToKeep days.

    The body is a bare boolean. The number of deleted rows is reported in the
    X-Purged-Count header.
    """
    try:
        params = PurgeParams.parse(days_to_keep, producer_id)
    except ValueError as e:
        logger.error(f"Invalid purge parameters: {e}")
        return JSONResponse(content=False, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    try:
        deleted = purge_request_records(db, params.producer_id, params.days_to_keep)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"Database error purging records for producer {params.producer_id}: {e}",
            exc_info=True,
        )
        return JSONResponse(content=False, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return JSONResponse(
        content=True,
        status_code=status.HTTP_200_OK,
        headers={PURGED_COUNT_HEADER: str(deleted)},
    )
