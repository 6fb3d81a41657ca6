"""
Configuration module for the Book Management service.

This module defines the Settings class, which loads environment variables
and provides application-wide configuration, including the database URL,
logging level, HTTP server options and pagination limits.

Usage:
    Import the `settings` object to access configuration throughout the project.
"""

import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL (str): Database connection string.
        ENVIRONMENT (str): Current environment (e.g., 'production', 'development').
        LOG_LEVEL (str): Root logging level.
        DEBUG (bool): Exposes error details in 500 responses and enables reload.
        API_TITLE (str): Title shown in the OpenAPI document.
        API_VERSION (str): Version reported by the API and the health endpoint.
        HOST (str): Bind address for the HTTP server.
        PORT (int): Bind port for the HTTP server.
        DEFAULT_PAGE_SIZE (int): Page size used when the client sends none.
        MAX_PAGE_SIZE (int): Largest page size a client may request.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./books.db")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEBUG: bool = False
    API_TITLE: str = "Book Management API"
    API_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    @property
    def is_sqlite(self) -> bool:
        """
        Whether the configured database is SQLite.

        Returns:
            bool: True for `sqlite://` URLs.
        """
        return self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
