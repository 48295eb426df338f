"""
Setup script for creating the users and cars tables.
Existing tables are left untouched.
"""

import logging
from carowners.core.config import settings
from carowners.db.init_db import init_db
from carowners.db.session import open_client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def setup_database():
    """Initialize database tables for the demo."""
    logger.info("Creating database tables...")
    try:
        with open_client(settings.database_uri()) as client:
            init_db(client.engine)
        logger.info("Database tables created successfully!")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

if __name__ == "__main__":
    setup_database()
