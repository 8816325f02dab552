import logging
import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(sqlite_engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless switched on per connection."""

    @event.listens_for(sqlite_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# SQLite has no server-side pool to tune
if settings.DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
else:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,  # Connection pool size
        max_overflow=20  # Allow up to 20 connections beyond pool_size
    )

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def execute(db: Session, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Run a statement written with PostgreSQL-style positional placeholders.

    `$1..$N` are rewritten to named binds so the same SQL text runs through
    SQLAlchemy on PostgreSQL and SQLite. Values are always bound, never
    interpolated.

    Args:
        db: Database session
        sql: SQL text using $1..$N placeholders
        params: Positional values, params[0] binds to $1

    Returns:
        Result rows as plain dicts (empty list when nothing matched)
    """
    bound = {f"p{idx}": value for idx, value in enumerate(params, start=1)}
    statement = text(_POSITIONAL_PARAM.sub(lambda m: f":p{m.group(1)}", sql))

    # Values can hold password hashes; only their count is logged
    logger.debug(f"SQL: {' '.join(sql.split())} | {len(bound)} params")

    result = db.execute(statement, bound)
    return [dict(row) for row in result.mappings().all()]


def init_db():
    """
    Initialize database.

    Alembic owns the PostgreSQL schema ("alembic upgrade head"). For SQLite
    development databases the tables are created from the model metadata.
    """
    from app.models import company, job, user, application  # Import models to register them
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
