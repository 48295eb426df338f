from sqlalchemy import Column, Integer, inspect

class BaseModel:
    """Base class for all database models."""

    # Primary key with autoincrement=True, generated by the store
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    def __repr__(self):
        # Render as "User(id=1, age=30, name=a8m)", columns in table order with id first
        columns = [c.key for c in inspect(type(self)).columns if not c.foreign_keys]
        columns.sort(key=lambda key: key != "id")
        fields = ", ".join(f"{key}={getattr(self, key)}" for key in columns)
        return f"{type(self).__name__}({fields})"
