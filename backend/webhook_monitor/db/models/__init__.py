"""Database models package."""
from webhook_monitor.db.models.master_webhook_server import MasterWebhookServer
from webhook_monitor.db.models.producer import Producer
from webhook_monitor.db.models.request_details import RequestDetails

__all__ = ["MasterWebhookServer", "Producer", "RequestDetails"]
