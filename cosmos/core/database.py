from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for the conversation database.

    Only SQLite is supported: the store relies on SQLite upserts and rowid ordering.
    Connections get foreign key enforcement switched on as they are opened.
    """
    if not url.startswith("sqlite"):
        raise ValueError(f"Unsupported database URL (SQLite only): {url}")
    kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, **kwargs)
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def init_db(engine: Engine) -> None:
    import cosmos.models.conversation  # noqa: F401 - ensure models are registered
    SQLModel.metadata.create_all(engine)
