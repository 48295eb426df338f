"""Test configuration for the data-access layer.

A file-backed SQLite database under tmp_path stands in for MySQL, so every
test gets a fresh, real database with the schema already applied.
"""

from __future__ import annotations

from typing import Generator

import pytest
from sqlalchemy.orm import Session

from carowners.db.init_db import init_db
from carowners.db.session import Client, open_client


@pytest.fixture
def database_url(tmp_path) -> str:
    """URL of an empty SQLite database file."""
    return f"sqlite:///{tmp_path / 'carowners.db'}"


@pytest.fixture
def client(database_url) -> Generator[Client, None, None]:
    """Open client with the users and cars tables created."""
    with open_client(database_url) as client:
        init_db(client.engine)
        yield client


@pytest.fixture
def db(client) -> Generator[Session, None, None]:
    """Session bound to the test database."""
    with client.session() as session:
        yield session
