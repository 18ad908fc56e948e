"""Database configuration and connection setup"""
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool

from app.config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def _enable_sqlite_immediate_transactions(engine: Engine) -> None:
    """
    Make every SQLite transaction take the database write lock up front.

    SQLite ignores SELECT ... FOR UPDATE, so without this two sessions could both
    read the appointment table before either writes.
    """

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        # let SQLAlchemy emit BEGIN instead of pysqlite
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL with the locking behaviour bookings rely on"""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": 30},
            echo=False,
        )
        _enable_sqlite_immediate_transactions(engine)
        return engine

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=False,
    )


# Create database engine with connection pooling
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine = None):
    """Create all database tables"""
    from app.models import Base

    bind = bind or engine
    logger.info("Creating all tables...")
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created successfully")


if __name__ == "__main__":
    create_tables()
