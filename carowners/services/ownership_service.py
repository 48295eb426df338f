"""
Create and query operations over users and the cars they own.

Every function takes an explicit session. Database failures are rolled back
where needed and re-raised as DataAccessError subclasses carrying the
operation that failed.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import MultipleResultsFound, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Session

from carowners.core.exceptions import (
    MultipleResultsError,
    NotFoundError,
    OwnerNotFoundError,
    QueryError,
    RecordCreationError,
)
from carowners.models import Car, User
from carowners.schemas.car import CarCreate
from carowners.schemas.user import UserCreate

logger = logging.getLogger(__name__)

T = TypeVar("T", User, Car)

DEFAULT_CAR_MODELS = ("Tesla", "Ford")


def _only(db: Session, statement, entity: str, criteria: str) -> Any:
    """Run a query that must match exactly one row."""
    try:
        return db.execute(statement).scalar_one()
    except NoResultFound as e:
        raise NotFoundError(entity, criteria) from e
    except MultipleResultsFound as e:
        raise MultipleResultsError(entity, criteria) from e
    except SQLAlchemyError as e:
        raise QueryError(f"failed querying {entity} ({criteria}): {e}") from e


def _save(db: Session, record: T, entity: str) -> T:
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        raise RecordCreationError(entity, str(e)) from e
    return record


def create_user(db: Session, user_in: UserCreate) -> User:
    """Insert one user and return it with its generated id."""
    user = _save(db, User(name=user_in.name, age=user_in.age), "user")
    logger.info(f"user was created: {user}")
    return user


def query_user(db: Session, name: str) -> User:
    """
    Look up the single user with the given name.

    Raises:
        NotFoundError: If no user has this name
        MultipleResultsError: If several users share it
    """
    user = _only(db, select(User).where(User.name == name), "user", f"name={name!r}")
    logger.info(f"user returned: {user}")
    return user


def _new_car(db: Session, car_in: CarCreate, owner: Optional[User] = None) -> Car:
    car = _save(db, Car(model=car_in.model, registered_at=car_in.registered_at, owner=owner), "car")
    logger.info(f"car was created: {car}")
    return car


def default_cars() -> List[CarCreate]:
    return [CarCreate(model=model) for model in DEFAULT_CAR_MODELS]


def create_cars(
    db: Session,
    owner_in: UserCreate,
    cars_in: Optional[Sequence[CarCreate]] = None
) -> User:
    """
    Create cars, then a new user owning all of them.

    Args:
        db: Database session
        owner_in: The user to create
        cars_in: Cars to create, a Tesla and a Ford registered now by default

    Returns:
        User: The new user, its cars linked
    """
    if cars_in is None:
        cars_in = default_cars()

    cars = [_new_car(db, car_in) for car_in in cars_in]

    user = User(name=owner_in.name, age=owner_in.age, cars=cars)
    user = _save(db, user, "user")
    logger.info(f"user was created: {user}")
    return user


def add_cars(db: Session, user: User, cars_in: Sequence[CarCreate]) -> User:
    """Create cars owned by an existing user."""
    for car_in in cars_in:
        _new_car(db, car_in, owner=user)
    db.refresh(user)
    return user


def query_cars(db: Session, user: User) -> List[Car]:
    """Return every car owned by the user."""
    try:
        cars = list(db.execute(select(Car).where(Car.owner_id == user.id)).scalars())
    except SQLAlchemyError as e:
        raise QueryError(f"failed querying user cars: {e}") from e
    logger.info(f"returned cars: {cars}")
    return cars


def query_car_by_model(db: Session, user: User, model: str) -> Car:
    """Return the single car of the given model owned by the user."""
    statement = select(Car).where(Car.owner_id == user.id, Car.model == model)
    car = _only(db, statement, "car", f"owner={user.id}, model={model!r}")
    logger.info(f"{car}")
    return car


def query_car_owner(db: Session, car: Car) -> User:
    """Follow the inverse edge from a car to the user owning it."""
    if car.owner_id is None:
        raise OwnerNotFoundError(car.model)
    try:
        return _only(db, select(User).where(User.id == car.owner_id), "owner", f"car {car.model!r}")
    except NotFoundError as e:
        raise OwnerNotFoundError(car.model) from e


def query_car_users(db: Session, user: User) -> List[Tuple[str, str]]:
    """
    Query the user's cars, then each car's owner.

    Returns:
        List of (car model, owner name) pairs
    """
    pairs = []
    for car in query_cars(db, user):
        owner = query_car_owner(db, car)
        logger.info(f'car "{car.model}" owner: "{owner.name}"')
        pairs.append((car.model, owner.name))
    return pairs
