from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

# Base class for models
Base = declarative_base()


def is_memory_database(database_url: str) -> bool:
    url = make_url(database_url)
    return (
        url.get_backend_name() == "sqlite"
        and (url.database in (None, "", ":memory:") or url.query.get("mode") == "memory")
    )


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL, with SQLite tweaks when needed"""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    if is_memory_database(database_url):
        # One shared connection, otherwise each worker thread gets its own empty database
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    engine = create_engine(
        database_url,
        connect_args={
            "check_same_thread": False,
            "timeout": 30
        },
        pool_pre_ping=True
    )

    # Enable WAL mode for SQLite so readers don't block the writer
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine
