from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import StaticPool
from pathlib import Path

from config.catalog_config import get_settings

Base = declarative_base()


def build_engine(database_url: str | None = None) -> Engine:
    """
    Create an engine for the configured database.

    SQLite files get WAL mode and enforced foreign keys; an in-memory SQLite
    URL shares one connection so every session sees the same tables.
    """
    url = make_url(database_url or get_settings().database_url)

    if url.get_backend_name() != 'sqlite':
        return create_engine(url, echo=False, pool_pre_ping=True, pool_recycle=3600)

    if url.database in (None, '', ':memory:'):
        engine = create_engine(
            url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
            echo=False,
        )
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url, connect_args={'check_same_thread': False}, echo=False)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        if url.database not in (None, '', ':memory:'):
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create tables if needed and return a session factory bound to the engine."""
    import models  # noqa: F401  registers the mapped tables on Base

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


_session_factory: sessionmaker | None = None


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(build_engine())
    return _session_factory


@contextmanager
def session_scope(factory: sessionmaker | None = None):
    """
    Unit of work around one service call.

    Commits when the block finishes, rolls back if it raises.
    """
    db: Session = (factory or get_session_factory())()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
