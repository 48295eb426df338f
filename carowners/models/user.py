"""
SQLAlchemy model for the users table.
"""

from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship

from carowners.db.session import Base
from carowners.db.base_model import BaseModel

class User(Base, BaseModel):
    """
    A car owner.
    Names are indexed for lookup but not unique.
    """
    __tablename__ = "users"

    age = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False, index=True)

    # Define relationship to owned cars
    cars = relationship("Car", back_populates="owner")
