"""Celery application running scheduled retention purges."""

from __future__ import annotations

import ssl
from typing import Any

from celery import Celery

from webhook_monitor.core.config import Settings, get_settings
from webhook_monitor.utils.redis_client import is_tls_url, normalize_redis_url

PURGE_TASK_NAME = "webhook_monitor.workers.tasks.purge_request_records"
PURGE_QUEUE = "retention"


def _with_ssl_param(url: str) -> str:
    # The Redis result backend reads ssl_cert_reqs from the URL during init
    if "ssl_cert_reqs" in url:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}ssl_cert_reqs=none"


def build_beat_schedule(settings: Settings) -> dict[str, dict[str, Any]]:
    """One periodic purge entry per configured producer retention policy."""
    schedule: dict[str, dict[str, Any]] = {}
    for producer_id, days_to_keep in sorted(settings.retention_policies.items()):
        schedule[f"purge-producer-{producer_id}"] = {
            "task": PURGE_TASK_NAME,
            "schedule": float(settings.retention_interval_seconds),
            "args": (producer_id, days_to_keep),
            "options": {"queue": PURGE_QUEUE},
        }
    return schedule


def create_celery_app(settings: Settings | None = None) -> Celery:
    settings = settings or get_settings()

    broker_url = normalize_redis_url(settings.celery_broker_url or settings.redis_url)
    backend_url = normalize_redis_url(settings.celery_result_url or settings.redis_url)
    is_ssl = is_tls_url(broker_url) or is_tls_url(backend_url)
    if is_ssl:
        broker_url = _with_ssl_param(broker_url)
        backend_url = _with_ssl_param(backend_url)

    app = Celery("webhook_monitor", broker=broker_url, backend=backend_url)

    config: dict[str, Any] = {
        "task_serializer": "json",
        "accept_content": ["json"],
        "result_serializer": "json",
        "timezone": "UTC",
        "enable_utc": True,
        "task_acks_late": True,
        "task_reject_on_worker_lost": True,
        "worker_prefetch_multiplier": 1,
        "task_time_limit": 600,
        "task_soft_time_limit": 540,
        "result_expires": 3600,
        "broker_connection_retry_on_startup": True,
        "worker_hijack_root_logger": False,
        "task_routes": {PURGE_TASK_NAME: {"queue": PURGE_QUEUE}},
        "task_default_queue": PURGE_QUEUE,
        "beat_schedule": build_beat_schedule(settings),
    }
    if is_ssl:
        ssl_dict = {"ssl_cert_reqs": ssl.CERT_NONE}
        config.update(
            {
                "broker_use_ssl": ssl_dict,
                "redis_backend_use_ssl": ssl_dict,
                "broker_transport_options": ssl_dict.copy(),
                "result_backend_transport_options": ssl_dict.copy(),
            }
        )
    app.conf.update(config)
    return app


celery_app = create_celery_app()

# Register tasks with celery_app
from webhook_monitor.workers.tasks import purge_records  # noqa: E402,F401
