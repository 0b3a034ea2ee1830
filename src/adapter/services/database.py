from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    pysqlite manages transactions on its own and breaks SAVEPOINT;
    hand BEGIN back to SQLAlchemy so begin_nested() works.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(db_uri: str, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(db_uri, echo=echo, future=True)
    enable_sqlite_savepoints(engine)
    return engine
