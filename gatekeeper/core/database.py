"""Database engine, session management and schema bootstrap."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from gatekeeper.core.config import settings

# Seconds a SQLite connection waits on a locked database before failing.
SQLITE_BUSY_TIMEOUT_SEC = 30


def build_engine(url: str, echo: bool = False, **kwargs: Any) -> Engine:
    """
    Create an engine; SQLite connections are shareable across worker threads.

    Bound parameters are kept out of error messages and logs: INSERTs into
    users carry the password hash.
    """
    connect_args: dict[str, Any] = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT_SEC}
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=echo,
        hide_parameters=True,
        connect_args=connect_args,
        **kwargs,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """Create any missing tables from the ORM metadata (no-op for existing ones)."""
    from gatekeeper.models import Base

    Base.metadata.create_all(bind=bind or engine)


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
