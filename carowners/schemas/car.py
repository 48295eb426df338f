from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime

class CarCreate(BaseModel):
    """Schema for creating a car record in the database."""
    model: str = Field(..., min_length=1, max_length=255, description="Car model (e.g., 'Tesla', 'Ford')")
    registered_at: datetime = Field(default_factory=datetime.now, description="Registration timestamp")

class CarRead(BaseModel):
    """Schema for returning a car record from the database."""
    id: int = Field(..., description="Car ID")
    model: str = Field(..., description="Car model")
    registered_at: datetime = Field(..., description="Registration timestamp")
    owner_id: Optional[int] = Field(None, description="ID of the owning user")

    model_config = {
        "from_attributes": True
    }
