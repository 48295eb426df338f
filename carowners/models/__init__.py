"""
Import all models from their respective modules.
"""

from carowners.models.user import User
from carowners.models.car import Car

# Export all models
__all__ = [
    "User",
    "Car",
]
