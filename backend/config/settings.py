from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache
from typing import List, Literal
import os


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file (for secrets like the JWT key)
    - System environment

    Variable names match docker-compose conventions:
    - POSTGRES_HOST, POSTGRES_PORT, etc. (for database)
    - JWT_SECRET_KEY or SECRET_KEY (for bearer tokens)
    - STORAGE_BACKEND=memory to run without a database
    """

    # JWT - uses SECRET_KEY from .env or generates default
    jwt_secret_key: str = "dev-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Storage
    storage_backend: Literal["postgres", "memory"] = "postgres"

    # PostgreSQL (from docker-compose)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "newspaper_user"
    postgres_password: str = "newspaper_pass"
    postgres_db: str = "newspaper"
    postgres_pool_min: int = 2
    postgres_pool_max: int = 10

    # Presentation
    display_date_format: str = "%d.%m.%Y %H:%M:%S"

    # Newspaper frontend
    cors_origins: List[str] = ["http://localhost:8081"]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('jwt_secret_key', mode='before')
    @classmethod
    def get_jwt_secret(cls, v):
        """Use SECRET_KEY from env if JWT_SECRET_KEY not set"""
        if v and v != "dev-secret-key-change-in-production":
            return v
        # Fall back to SECRET_KEY (used in .env)
        return os.getenv('SECRET_KEY', v or 'dev-secret-key-change-in-production')


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
