"""
Database connector: SQLAlchemy engine factory for SQL Server.
One validated engine and one open connection per invocation.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from tablescript.core.errors import DatabaseConnectionError
from tablescript.models.connection import ConnectionRequest

logger = logging.getLogger(__name__)


def create_engine_from_request(req: ConnectionRequest) -> Engine:
    """Build and test a SQLAlchemy engine from a ConnectionRequest."""
    url = req.get_sqlalchemy_url()
    engine = create_engine(url, pool_pre_ping=True)
    # Validate the connection immediately
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseConnectionError(req.describe(), e) from e
    logger.info("Connected to %s", req.describe())
    return engine


@contextmanager
def catalog_connection(req: ConnectionRequest) -> Iterator[Connection]:
    """Yield a single open connection; the engine is disposed on exit."""
    engine = create_engine_from_request(req)
    try:
        with engine.connect() as conn:
            yield conn
    finally:
        engine.dispose()
