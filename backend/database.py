import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from backend import config

logger = logging.getLogger("backend.db")

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """Create the pooled engine for ``url``.

    Server databases get a bounded QueuePool (size, overflow, checkout
    timeout, recycle) and pre-ping. SQLite gets ``check_same_thread`` off and
    foreign key enforcement turned on for every new connection.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", config.DB_POOL_SIZE)
        kwargs.setdefault("max_overflow", config.DB_POOL_MAX_OVERFLOW)
        kwargs.setdefault("pool_timeout", config.DB_POOL_TIMEOUT)
        kwargs.setdefault("pool_recycle", config.DB_POOL_RECYCLE)
        kwargs.setdefault("pool_pre_ping", True)
        if url.startswith("postgresql"):
            kwargs.setdefault("connect_args", {"connect_timeout": config.DB_POOL_TIMEOUT})

    engine = create_engine(url, echo=echo, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    logger.info("engine_created", extra={"dialect": engine.dialect.name})
    return engine


engine = build_engine(config.DATABASE_URL, echo=config.DB_ECHO)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine) -> None:
    # models must be imported so their tables are registered on Base.metadata
    from backend.models import employee, task  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
