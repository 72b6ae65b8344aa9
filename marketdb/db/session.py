# marketdb/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def install_sqlite_hooks(engine: Engine, *, transactional_ddl: bool) -> None:
    """Enforce FK actions on SQLite and, for pysqlite, make DDL transactional.

    pysqlite does not emit BEGIN before CREATE/ALTER, so the engine emits it
    itself and a failed schema unit rolls back completely.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        if transactional_ddl:
            dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    if transactional_ddl:

        @event.listens_for(engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")


def make_engine(url: str, **kwargs) -> Engine:
    """Build a sync engine; SQLite URLs get FK enforcement and transactional DDL."""
    connect_args = dict(kwargs.pop("connect_args", {}) or {})
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        # SQLite requires special connect args for multi-thread access.
        connect_args.setdefault("check_same_thread", False)

    engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args, **kwargs)
    if is_sqlite:
        install_sqlite_hooks(engine, transactional_ddl=True)
    return engine

