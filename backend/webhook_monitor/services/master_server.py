"""Lookup for the single pre-seeded master webhook server row."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from webhook_monitor.db.models import MasterWebhookServer


def get_master_webhook_server(db: Session) -> MasterWebhookServer:
    """Return the first master config row.

    An empty table degrades to an unsaved record with an empty URL rather
    than an error.
    """
    server = db.scalar(select(MasterWebhookServer).order_by(MasterWebhookServer.id).limit(1))
    if server is None:
        return MasterWebhookServer(webhook_server_url="")
    return server
