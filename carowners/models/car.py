"""
SQLAlchemy model for the cars table.
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from carowners.db.session import Base
from carowners.db.base_model import BaseModel

class Car(Base, BaseModel):
    """
    A registered car, owned by at most one user.
    """
    __tablename__ = "cars"

    model = Column(String(255), nullable=False)
    registered_at = Column(DateTime, nullable=False)

    # Foreign key backing both the "cars" edge and its inverse "owner"
    owner_id = Column("user_cars", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Define relationship to owner
    owner = relationship("User", back_populates="cars")
