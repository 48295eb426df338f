import logging
from contextlib import contextmanager
from typing import Iterator, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from carowners.core.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

# Create Base class for declarative class definitions
Base = declarative_base()


class Client:
    """
    Handle to one database: owns the engine and hands out sessions.

    Use it as a context manager so the engine is disposed however the
    block exits.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        # Create a session factory bound to this engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self.closed = False

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a new session and close it when done."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def close(self) -> None:
        if self.closed:
            return
        self.engine.dispose()
        self.closed = True
        logger.info("Database connection closed")

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_client(url: Union[str, URL], echo: bool = False) -> Client:
    """
    Open a database client and verify the connection.

    Args:
        url: SQLAlchemy database URL
        echo: Log every SQL statement emitted by the engine

    Returns:
        Client: Live handle to the database

    Raises:
        DatabaseConnectionError: If the engine cannot be built or the database is unreachable
    """
    safe_url = url.render_as_string(hide_password=True) if isinstance(url, URL) else _hide_password(url)
    try:
        engine = create_engine(
            url,
            echo=echo,
            pool_pre_ping=True  # Test connections for liveness when checked out from pool
        )
    except (SQLAlchemyError, ImportError, ValueError) as e:
        raise DatabaseConnectionError(safe_url, str(e)) from e

    # create_engine is lazy, a round-trip proves the database is reachable
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseConnectionError(safe_url, str(e)) from e

    logger.info(f"Connected to {safe_url}")
    return Client(engine)


def _hide_password(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except (SQLAlchemyError, ValueError):
        return "<unparseable url>"
