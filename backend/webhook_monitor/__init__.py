"""Webhook ingestion and audit-logging service."""

__version__ = "0.1.0"
