import logging
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from carowners.core.exceptions import SchemaCreationError
from carowners.models import User, Car

logger = logging.getLogger(__name__)

def init_db(engine: Engine):
    """
    Initialize the database by creating the users and cars tables.
    Tables that already exist are left untouched, so this is safe to run on every startup.
    """
    try:
        # users first, cars references it
        tables = [User.__table__, Car.__table__]
        for table in tables:
            table.create(engine, checkfirst=True)
            logger.info(f"Table {table.name} ready")

        logger.info("Schema resources created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise SchemaCreationError(str(e)) from e
