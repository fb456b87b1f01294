"""Database session factory and configuration.

Provides database connectivity and session management. Importing this module
registers the tenant isolation session listeners (tenancy.orm_events).
"""

from contextlib import contextmanager
from typing import Generator

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from config import settings
from datastore.client import DataClient
from tenancy.interceptor import create_data_client
import tenancy.orm_events  # noqa: F401  (session listeners)


def build_engine(database_url: str, echo: bool = False):
    """Create an engine for database_url.

    Pool settings only apply to server databases. In-memory SQLite uses a
    single shared connection so every session and thread sees the same data.
    """
    engine_kwargs = {
        "pool_pre_ping": True,
        "echo": echo,
    }

    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_size"] = 5
        engine_kwargs["max_overflow"] = 10

    return create_engine(database_url, **engine_kwargs)


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """Context manager for database sessions.

    Usage:
        with tenant_scope(tenant_id), get_db_session() as session:
            client = create_data_client(session)
            client.find_many(Material)

    Automatically commits on success, rolls back on exception.
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI endpoints.

    Usage:
        @app.get("/customers")
        def list_customers(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_data_client(db: Session = Depends(get_db)) -> DataClient:
    """Dependency returning a tenant-isolated DataClient for the request.

    Usage:
        @app.get("/customers")
        def list_customers(client: DataClient = Depends(get_data_client)):
            return client.find_many(Customer)
    """
    return create_data_client(db)
