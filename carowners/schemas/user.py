from typing import List
from pydantic import BaseModel, Field

from carowners.schemas.car import CarRead

class UserCreate(BaseModel):
    """Schema for creating a user record in the database."""
    name: str = Field(..., min_length=1, max_length=255, description="User name, used as the lookup key")
    age: int = Field(..., ge=0, description="Age in years")

class UserRead(BaseModel):
    """Schema for returning a user record from the database."""
    id: int = Field(..., description="User ID")
    name: str = Field(..., description="User name")
    age: int = Field(..., description="Age in years")
    cars: List[CarRead] = Field(default=[], description="Cars owned by the user")

    model_config = {
        "from_attributes": True
    }
