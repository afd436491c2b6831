"""Celery task for scheduled retention purges."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from webhook_monitor.db.session import get_fresh_session
from webhook_monitor.services.retention import purge_request_records
from webhook_monitor.workers.celery_app import PURGE_TASK_NAME, celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name=PURGE_TASK_NAME)
def purge_request_records_task(self, producer_id: int, days_to_keep: int) -> dict[str, Any]:
    """Purge one producer's aged records in a dedicated session.

    Failures are logged and reported in the result rather than retried; the
    next scheduled run picks up whatever was left behind.
    """
    session = get_fresh_session()
    try:
        deleted = purge_request_records(session, producer_id, days_to_keep)
        return {"success": True, "deleted": deleted}
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(
            f"Database error in scheduled purge for producer {producer_id}: {e}",
            exc_info=True,
        )
        return {"success": False, "deleted": 0, "error": str(e)}
    except ValueError as e:
        logger.error(f"Invalid scheduled purge for producer {producer_id}: {e}")
        return {"success": False, "deleted": 0, "error": str(e)}
    finally:
        session.close()
