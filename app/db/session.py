from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def _build_engine():
    url = settings.DATABASE_URL
    engine_kwargs = {
        "echo": (settings.APP_ENV == "dev"),
        "pool_pre_ping": True,
        "future": True,
    }

    if url.startswith("sqlite"):
        # in-memory SQLite is only meant for the test suite
        if settings.APP_ENV != "test":
            raise RuntimeError("SQLite is only supported with APP_ENV=test. Please configure PostgreSQL via DATABASE_URL or DB_* settings.")
        engine_kwargs.update({
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        })
        return create_engine(url, **engine_kwargs)

    # postgreSQL specific config with connection pooling
    engine_kwargs.update({
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_CONNECTION_TIMEOUT,
        "pool_recycle": 3600,  # Recycle connections every hour
        "pool_reset_on_return": "commit",
        "connect_args": {
            "connect_timeout": settings.DB_CONNECTION_TIMEOUT,
            "application_name": "gastro_backend",
        }
    })

    return create_engine(url, **engine_kwargs)


engine = _build_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@contextmanager
def session_scope() -> Iterator[Session]:
    """provide a transactional scope around a series of operations."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# fastAPI dependency
def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
