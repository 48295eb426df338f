"""
Demo script: connect, migrate, then create and query users and their cars.
"""

import argparse
import logging
import sys

from carowners.core.config import settings
from carowners.core.exceptions import DataAccessError, InvalidDSNError
from carowners.db.init_db import init_db
from carowners.db.session import open_client
from carowners.schemas.user import UserCreate
from carowners.services.ownership_service import (
    create_cars,
    create_user,
    query_car_by_model,
    query_car_users,
    query_cars,
    query_user,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def fail(step, error):
    """Log the failed step and terminate the process."""
    logger.error(f"failed {step}: {error}")
    sys.exit(1)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"{settings.PROJECT_NAME}: create and query users and the cars they own.")
    parser.add_argument("--database-url", default=None, help="SQLAlchemy database URL (defaults to the configured driver + DSN).")
    parser.add_argument("--name", default=settings.DEMO_USER_NAME, help="Name of the demo user.")
    parser.add_argument("--age", type=int, default=settings.DEMO_USER_AGE, help="Age of the demo user.")
    parser.add_argument("--create-user", action="store_true", help="Insert the demo user before querying it.")
    parser.add_argument("--create-cars", action="store_true", help="Insert a Tesla and a Ford and a new demo user owning both.")
    parser.add_argument("--query-cars", action="store_true", help="List the demo user's cars and look up the Ford.")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.LOG_LEVEL.upper(), help="Logging level (e.g., 'INFO', 'DEBUG').")
    return parser.parse_args(argv)


def run(args):
    """Run the demo steps in order, exiting on the first failure."""
    try:
        database_url = args.database_url or settings.database_uri()
        client = open_client(database_url, echo=settings.SQL_ECHO)
    except (DataAccessError, InvalidDSNError) as e:
        fail("opening connection", e)

    with client:
        # Run the auto migration tool
        try:
            init_db(client.engine)
        except DataAccessError as e:
            fail("creating schema resources", e)

        with client.session() as db:
            try:
                user_in = UserCreate(name=args.name, age=args.age)
            except ValueError as e:
                fail("validating user", e)

            if args.create_user:
                try:
                    create_user(db, user_in)
                except DataAccessError as e:
                    fail("to create user", e)

            try:
                user = query_user(db, args.name)
            except DataAccessError as e:
                fail("to query user", e)
            logger.info(f"user: {user}")

            if args.create_cars:
                try:
                    user = create_cars(db, user_in)
                except DataAccessError as e:
                    fail("to create cars", e)
                logger.info(f"user: {user}")

            if args.query_cars:
                try:
                    query_cars(db, user)
                    query_car_by_model(db, user, "Ford")
                except DataAccessError as e:
                    fail("to query cars", e)

            try:
                query_car_users(db, user)
            except DataAccessError as e:
                fail("to query car owners", e)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    run(args)


if __name__ == "__main__":
    main()
