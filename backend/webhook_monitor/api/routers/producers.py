"""Producer registration endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from webhook_monitor.api.dependencies.db import get_session
from webhook_monitor.api.schemas.producer import ProducerCreate, ProducerRead
from webhook_monitor.services.producer_registry import (
    get_producer,
    list_producers,
    register_producer,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "",
    summary="Register a producer",
    status_code=status.HTTP_201_CREATED,
    response_model=ProducerRead,
    responses={200: {"model": ProducerRead, "description": "Producer already registered"}},
)
async def create_producer(
    payload: ProducerCreate,
    response: Response,
    db: Session = Depends(get_session),
) -> ProducerRead:
    """Register a callback URL, or return the existing producer for it.

    URLs match case-insensitively. A repeat registration returns 200 with the
    stored record untouched.
    """
    try:
        producer, created = register_producer(db, payload.url)
        if not created:
            response.status_code = status.HTTP_200_OK
        return ProducerRead.model_validate(producer)

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error registering producer: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register producer",
        ) from e
    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error registering producer: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        ) from e


@router.get(
    "",
    summary="List registered producers",
    response_model=list[ProducerRead],
)
async def read_producers(
    db: Session = Depends(get_session),
) -> list[ProducerRead]:
    try:
        return [ProducerRead.model_validate(p) for p in list_producers(db)]
    except SQLAlchemyError as e:
        logger.error(f"Database error listing producers: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve producers",
        ) from e


@router.get(
    "/{producer_id}",
    summary="Get a producer",
    response_model=ProducerRead,
)
async def read_producer(
    producer_id: int,
    db: Session = Depends(get_session),
) -> ProducerRead:
    try:
        producer = get_producer(db, producer_id)
        if not producer:
            raise HTTPException(status_code=404, detail="Producer not found")
        return ProducerRead.model_validate(producer)

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Database error reading producer {producer_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve producer",
        ) from e
