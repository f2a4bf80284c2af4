"""
Database engine, session factory and declarative base for the remote store
"""
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from quizmaster.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves foreign key enforcement off per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(database_url: str, echo=False, **kwargs) -> Engine:
    """
    Creates and returns a SQLAlchemy Engine for the remote store.

    Parameters:
        database_url (str): The URL of the database to connect to.
        echo (bool): Whether or not to enable echoing of SQL statements.

    Returns:
        Engine: A SQLAlchemy Engine object representing the database connection.
    """
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", 5)
        kwargs.setdefault("pool_timeout", 30)
        kwargs.setdefault("pool_recycle", 1800)
    engine = create_engine(database_url, echo=echo, pool_pre_ping=True, **kwargs)

    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    """
    Create a sessionmaker bound to the given engine.

    Objects stay usable after commit so services can read generated ids
    and timestamps once the session is closed.
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


ENGINE = get_engine(settings.DATABASE_URL)
SessionLocal = get_session_factory(ENGINE)


def init_db(engine: Engine = ENGINE) -> None:
    """Create all remote store tables that do not exist yet"""
    # Register models on the metadata before create_all
    from quizmaster import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Remote store tables ensured")
