from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import STOCK_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2
# seconds a SQLite writer waits for the lock held by another transaction
SQLITE_BUSY_TIMEOUT = 15


def configure_sqlite(engine: Engine) -> Engine:
    """
    Make pysqlite honour foreign keys, BEGIN and SAVEPOINT.

    Every transaction starts with BEGIN IMMEDIATE and so holds the database
    write lock from its first statement. SQLite ignores SELECT ... FOR UPDATE;
    this is what serializes concurrent stock movements on that backend. A
    second writer waits at BEGIN (up to the busy timeout) and then reads the
    committed position.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_stock_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url, connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}
        )
        return configure_sqlite(engine)

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,          # max idle connections
        max_overflow=MAX_OVERFLOW,      # max temporary extra connections
        pool_timeout=30       # wait time before failing
    )


# Stock DB
stock_engine = create_stock_engine(STOCK_DATABASE_URL)
StockSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=stock_engine)


# Dependency


def get_stock_db():
    db = StockSessionLocal()
    try:
        yield db
    finally:
        db.close()
