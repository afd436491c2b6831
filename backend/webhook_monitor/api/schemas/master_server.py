"""Master webhook server schema."""

from webhook_monitor.api.schemas.common import CamelModel


class MasterWebhookServerRead(CamelModel):
    webhook_server_url: str = ""
