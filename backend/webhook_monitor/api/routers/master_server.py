"""Server identity endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from webhook_monitor.api.dependencies.db import get_session
from webhook_monitor.api.schemas.master_server import MasterWebhookServerRead
from webhook_monitor.services.master_server import get_master_webhook_server

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/masterWebhookServer",
    summary="Get the master webhook server",
    response_model=MasterWebhookServerRead,
)
async def master_webhook_server(
    db: Session = Depends(get_session),
) -> MasterWebhookServerRead:
    """Return the configured webhook server URL (empty when not seeded)."""
    try:
        return MasterWebhookServerRead.model_validate(get_master_webhook_server(db))
    except SQLAlchemyError as e:
        logger.error(f"Database error reading master webhook server: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve master webhook server",
        ) from e
