# devicehub/database.py
import logging

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from devicehub.core.config import Settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """
    Build the pooled engine shared by all request workers.

    - pool_pre_ping=True : validate connections before using them
    - pool_size / max_overflow bound how many store operations can be
      in flight at once; callers beyond that wait for a free connection

    SQLite URLs (local dev, tests) use SQLAlchemy's default pool since
    it does not accept the sizing arguments.
    """
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_engine(
        url,
        echo=settings.DB_ECHO,  # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY / ON DELETE RESTRICT unless the pragma is set per connection."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    # Import models so SQLModel metadata is populated before create_all()
    from devicehub.models import role, subscriber, user, device, assignment  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Tables verified: %s", ", ".join(sorted(SQLModel.metadata.tables)))


def get_session(request: Request):
    """
    FastAPI dependency that yields a SQLModel Session bound to the
    engine built during application startup (app.state.engine).

    The `with` block returns the connection to the pool on every exit
    path, including exceptions raised by the route.
    """
    with Session(request.app.state.engine) as session:
        yield session
