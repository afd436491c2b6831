"""Engine and session factory configuration."""

from collections.abc import Generator
import logging

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DisconnectionError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from webhook_monitor.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """Create an engine suited to the configured backend.

    SQLite (local runs and tests) shares one connection across threads;
    everything else gets a pre-pinged connection pool.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    # pool_pre_ping: Test connections before using (handles stale connections)
    # pool_recycle: Recycle connections after 30 minutes (prevents timeout)
    return create_engine(
        database_url,
        echo=False,
        future=True,
        poolclass=QueuePool,
        pool_pre_ping=True,
        pool_recycle=1800,
        pool_size=5,
        max_overflow=10,
        connect_args={"connect_timeout": 10},
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_fresh_session() -> Session:
    """Get a fresh database session, handling connection errors.

    Used by worker tasks that run outside the request lifecycle.
    """
    try:
        return SessionLocal()
    except (OperationalError, DisconnectionError) as e:
        logger.warning(f"Connection error creating session: {e}, retrying...")
        engine.dispose()
        return SessionLocal()


def get_db() -> Generator[Session, None, None]:
    """Yield a transactional session for request/worker lifecycles."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None, master_server_url: str | None = None) -> None:
    """Create missing tables and seed the master webhook server row.

    The master row is only inserted when a URL is configured and the table is
    still empty; an existing row is never overwritten.
    """
    from webhook_monitor.db.base import Base
    from webhook_monitor.db.models import MasterWebhookServer

    bind = bind or engine
    Base.metadata.create_all(bind)

    if not master_server_url:
        return

    with Session(bind) as session:
        existing = session.scalar(select(MasterWebhookServer).limit(1))
        if existing is not None:
            return
        session.add(MasterWebhookServer(webhook_server_url=master_server_url))
        session.commit()
        logger.info(f"Seeded master webhook server {master_server_url}")
