"""Tests for schema creation."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from sqlalchemy import Table, inspect
from sqlalchemy.exc import OperationalError

from carowners.core.exceptions import SchemaCreationError
from carowners.db.init_db import init_db
from carowners.db.session import open_client
from carowners.models import User


class TestInitDb:
    """Tests for init_db."""

    def test_creates_tables(self, database_url):
        with open_client(database_url) as client:
            init_db(client.engine)

            inspector = inspect(client.engine)
            assert set(inspector.get_table_names()) == {"users", "cars"}
            columns = {c["name"] for c in inspector.get_columns("cars")}
            assert columns == {"id", "model", "registered_at", "user_cars"}
            foreign_keys = inspector.get_foreign_keys("cars")
            assert foreign_keys[0]["referred_table"] == "users"

    def test_is_idempotent(self, client, db):
        db.add(User(name="a8m", age=30))
        db.commit()

        init_db(client.engine)

        assert db.query(User).count() == 1

    def test_failure_is_wrapped(self, client):
        error = OperationalError("CREATE TABLE users", {}, Exception("disk I/O error"))
        with patch.object(Table, "create", side_effect=error):
            with pytest.raises(SchemaCreationError, match="failed creating schema resources"):
                init_db(client.engine)
