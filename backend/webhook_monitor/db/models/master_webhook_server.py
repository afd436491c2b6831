"""SQLAlchemy model for the pre-seeded server identity row."""

from sqlalchemy import Column, Integer, Text

from webhook_monitor.db.base import Base


class MasterWebhookServer(Base):
    __tablename__ = "master_webhook_server"

    id = Column(Integer, primary_key=True)
    webhook_server_url = Column(Text, nullable=False, default="")
