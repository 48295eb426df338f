from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

from carowners.db.dsn import parse_dsn

# Explicitly load .env file and override existing environment variables
# This ensures that values from .env take precedence over system-wide environment variables.
load_dotenv(override=True)

class Settings(BaseSettings):
    """Settings for the car ownership demo."""

    PROJECT_NAME: str = "CarOwners Demo"

    # Database settings
    # Driver name + DSN, e.g. "mysql" and "user:password@tcp(host:port)/database?parseTime=True"
    DATABASE_DRIVER: str = "mysql"
    DATABASE_DSN: str = "mysql:mysql@tcp(localhost:3306)/test?parseTime=True"

    # A complete SQLAlchemy URL, takes precedence over driver + DSN when set
    DATABASE_URL: Optional[str] = None

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    def database_uri(self) -> str:
        """
        Resolve the SQLAlchemy URL to connect to.

        DATABASE_URL wins, then SQLALCHEMY_DATABASE_URI, then the URL built from driver + DSN.
        The DSN is only parsed here, so a bad one fails when a connection is wanted, not on import.

        Raises:
            InvalidDSNError: If the driver is unknown or the DSN is malformed
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        url = parse_dsn(self.DATABASE_DRIVER, self.DATABASE_DSN)
        return url.render_as_string(hide_password=False)

    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Record used by the demo script
    DEMO_USER_NAME: str = "a8m"
    DEMO_USER_AGE: int = 30

    model_config = {
        "case_sensitive": True,
        "env_file": ".env"
    }

# Create settings instance
settings = Settings()
