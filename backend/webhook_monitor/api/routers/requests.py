"""Webhook delivery logging endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from webhook_monitor.api.dependencies.db import get_session
from webhook_monitor.api.schemas.request_details import (
    RequestDetailsCreate,
    RequestDetailsRead,
)
from webhook_monitor.services.header_decoder import (
    HeaderDecodeError,
    decode_stored_headers,
)
from webhook_monitor.services.request_log import get_request, list_requests, log_request

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "",
    summary="Log a webhook delivery",
    status_code=status.HTTP_201_CREATED,
    response_model=RequestDetailsRead,
)
async def create_request_record(
    payload: RequestDetailsCreate,
    db: Session = Depends(get_session),
) -> RequestDetailsRead:
    """Persist one delivery with its headers blob and response metrics.

    Malformed bodies are rejected with 400 before anything is written.
    """
    try:
        record = log_request(db, payload)
        return RequestDetailsRead.model_validate(record)

    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error logging request: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Record Creation Failed!",
        ) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error logging request: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Record Creation Failed!",
        ) from e
    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error logging request: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        ) from e


@router.get(
    "",
    summary="List logged deliveries",
    response_model=list[RequestDetailsRead],
)
async def read_request_records(
    producer_id: int | None = Query(None, alias="ProducerId", description="Filter by producer"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_session),
) -> list[RequestDetailsRead]:
    """Return delivery records, newest first."""
    try:
        records = list_requests(db, producer_id=producer_id, limit=limit, offset=offset)
        return [RequestDetailsRead.model_validate(r) for r in records]
    except SQLAlchemyError as e:
        logger.error(f"Database error listing requests: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve request records",
        ) from e


@router.get(
    "/{request_id}",
    summary="Get a logged delivery",
    response_model=RequestDetailsRead,
)
async def read_request_record(
    request_id: int,
    db: Session = Depends(get_session),
) -> RequestDetailsRead:
    try:
        record = get_request(db, request_id)
        if not record:
            raise HTTPException(status_code=404, detail="Request record not found")
        return RequestDetailsRead.model_validate(record)

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Database error reading request {request_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve request record",
        ) from e


@router.get(
    "/{request_id}/headers",
    summary="Get decoded delivery headers",
)
async def read_request_headers(
    request_id: int,
    db: Session = Depends(get_session),
) -> dict[str, Any]:
    """Return the stored headers unwrapped into a plain name -> value mapping."""
    try:
        record = get_request(db, request_id)
        if not record:
            raise HTTPException(status_code=404, detail="Request record not found")
        return decode_stored_headers(record.headers)

    except HTTPException:
        raise
    except HeaderDecodeError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Stored headers could not be decoded: {e}",
        ) from e
    except SQLAlchemyError as e:
        logger.error(f"Database error reading headers for request {request_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve request record",
        ) from e
