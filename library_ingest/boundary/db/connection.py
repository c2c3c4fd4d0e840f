"""
Database connection management.

Provides SQLAlchemy engine and session factory for the metadata repository.

Dependencies: sqlalchemy, library_ingest.configs
System role: Database connection lifecycle management
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from library_ingest.configs.database import DatabaseSettings


def get_engine(db_config: DatabaseSettings) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling and health checks.

    pool_pre_ping=True verifies connections before use so stale
    connections are detected early. SQLite URLs skip pool sizing.

    Args:
        db_config: Database settings

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    url = db_config.database_url
    if url.startswith("sqlite"):
        return create_engine(url, echo=db_config.echo_sql)

    return create_engine(
        url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_session_factory(engine: Engine) -> sessionmaker:
    """
    Create session factory for database operations.

    Args:
        engine: Bound engine

    Returns:
        sessionmaker: Session factory with manual transaction control
    """
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
