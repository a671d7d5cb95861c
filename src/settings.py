"""App settings."""

from pydantic_settings import BaseSettings

from constants import API_PREFIX, DATABASE_CONNECTION_STRING, DATABASE_NAME, LOGGING_LEVEL


class Settings(BaseSettings):
    """Application settings, overridable through environment variables."""

    # API settings
    api_title: str = "Tutorhub API"
    api_version: str = "1.0.0"
    api_description: str = "CRUD API for datasets"
    api_prefix: str = API_PREFIX
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database settings
    database_connection_string: str = DATABASE_CONNECTION_STRING
    database_name: str = DATABASE_NAME

    # Logging
    logging_level: str = LOGGING_LEVEL


settings = Settings()
