"""
Database Session Management - Core database connectivity layer
"""

from contextlib import contextmanager
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Generator, Iterator
import logging

from app.core.config import settings
from app.core.exceptions import AppError

logger = logging.getLogger(__name__)

def build_engine(url: str, **overrides) -> Engine:
    """
    Create an engine for the given URL.
    SQLite has no server-side pool, so pool sizing only applies to real servers.
    """
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}  # Sessions cross FastAPI worker threads
    else:
        options = {
            "pool_size": settings.DB_POOL_SIZE,  # Number of persistent connections
            "max_overflow": settings.DB_MAX_OVERFLOW,  # Additional connections when pool is exhausted
            "pool_timeout": settings.DB_POOL_TIMEOUT,  # Wait time for available connection
            "pool_pre_ping": True,  # Verify connection health before using
        }
    options["echo"] = settings.DEBUG  # Log all SQL queries in debug mode
    options.update(overrides)  # Tests pass poolclass=StaticPool
    new_engine = create_engine(url, **options)

    if url.startswith("sqlite"):
        @event.listens_for(new_engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
            # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    @event.listens_for(new_engine, "connect")
    def receive_connect(dbapi_conn, connection_record):
        logger.debug("🔌 New database connection established")

    return new_engine

engine = build_engine(settings.DATABASE_URL)

# Session factory - creates new sessions for each request
SessionLocal = sessionmaker(
    autocommit=False,  # Require explicit commits
    autoflush=False,   # Control when changes are flushed to database
    expire_on_commit=False,  # Returned objects stay readable after commit
    bind=engine,
)

# Base class for all SQLAlchemy models - provides metadata and table registry
Base = declarative_base()

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides database session per request.
    Automatically handles session lifecycle and cleanup.
    """
    db = SessionLocal()  # Create new session
    try:
        yield db  # Provide session to route handler
    except Exception as e:
        if not isinstance(e, AppError):
            logger.error(f"❌ Database error during request: {str(e)}", exc_info=True)
        db.rollback()  # Never leave a half-applied transaction behind
        raise
    finally:
        db.close()  # Always close session to return connection to pool
        logger.debug("✅ Database session closed")

@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Transaction boundary around one service operation.

    Reads and writes inside the block see one snapshot; the block commits on
    success and rolls back on any exception, which is then re-raised unchanged.
    """
    try:
        yield db
        db.commit()  # Persist everything the operation flushed
    except Exception as e:
        db.rollback()  # Undo partial changes
        if not isinstance(e, AppError):  # Business errors are logged by their handler
            logger.error(f"❌ Transaction rolled back: {str(e)}", exc_info=True)
        raise

def init_db() -> None:
    """
    Initialize database by creating all tables.
    Used for development setup - production should use migrations.
    """
    logger.info("🏗️  Creating database tables...")
    try:
        from app.models import user, todo  # Import models to register with Base
        Base.metadata.create_all(bind=engine)  # Create tables if they don't exist
        logger.info("✅ Database tables created successfully")
    except Exception as e:
        logger.error(f"❌ Failed to create database tables: {str(e)}", exc_info=True)
        raise

def check_db_connection() -> bool:
    """
    Verify database connectivity - used for health checks and startup validation.
    Returns True if connection successful, False otherwise.
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))  # Simple query to test connection
        logger.debug("✅ Database connection successful")
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {str(e)}", exc_info=True)
        return False

def get_pool_stats() -> dict:
    """Current connection pool statistics (empty for pools without counters)"""
    pool = engine.pool  # SQLite pools expose fewer counters than QueuePool
    stats = {"pool_class": type(pool).__name__}
    for name in ("size", "checkedout", "overflow", "checkedin"):
        counter = getattr(pool, name, None)
        if callable(counter):
            stats[name] = counter()
    return stats

def close_db_connections():
    """Gracefully close all database connections on shutdown"""
    logger.info("🔌 Closing database connections...")
    engine.dispose()  # Close all connections in pool
    logger.info("✅ All database connections closed")
