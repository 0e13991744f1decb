from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config.database_config import DatabaseSettings, load_database_settings


def create_engine_from_settings(settings: DatabaseSettings) -> Engine:
    """
    Create the engine for the ownership store.

    SQLite connections get foreign key enforcement and a busy timeout so a
    locked database waits instead of failing immediately.
    """
    kwargs = {'echo': settings.echo, 'pool_pre_ping': settings.pool_pre_ping}
    if settings.is_sqlite:
        kwargs['connect_args'] = {'check_same_thread': False}
        if settings.is_in_memory:
            # One shared connection, otherwise every session sees an empty database
            kwargs['poolclass'] = StaticPool

    new_engine = create_engine(settings.database_url, **kwargs)

    if settings.is_sqlite:
        @event.listens_for(new_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute(f"PRAGMA busy_timeout={settings.busy_timeout_ms}")
            cursor.close()

    return new_engine


settings = load_database_settings()
engine = create_engine_from_settings(settings)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


@contextmanager
def session_scope(session_factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """
    Provide a transactional session for the duration of one operation.

    Commits when the block exits normally, rolls back when it raises, and
    closes the session on every path.
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except BaseException:
        db.rollback()
        raise
    finally:
        db.close()
