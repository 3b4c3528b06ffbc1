"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = Field(default="Storefront API")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(
        default="Catalog, account and back-office API for the storefront web client"
    )
    debug: bool = Field(default=False)

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=6060)
    reload: bool = Field(default=True)

    # Database settings
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    database_name: str = Field(default="storefront_db")

    # MongoDB connection settings
    mongodb_server_selection_timeout_ms: int = Field(default=30000)
    mongodb_connect_timeout_ms: int = Field(default=30000)
    mongodb_socket_timeout_ms: int = Field(default=30000)
    mongodb_max_pool_size: int = Field(default=10)
    mongodb_min_pool_size: int = Field(default=1)
    mongodb_retry_writes: bool = Field(default=True)
    mongodb_direct_connection: bool = Field(default=False)

    # Security settings
    jwt_secret: str = Field(default="change-this-secret-in-production-please")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_days: int = Field(default=7, ge=1)
    password_hash_rounds: int = Field(default=10, ge=4, le=31)

    # Logging settings
    log_level: str = Field(default="INFO")

    # API settings
    api_v1_prefix: str = Field(default="/api/v1")
    cors_origins: List[str] = Field(default=["*"])

    # Catalog settings
    product_limit: int = Field(default=12, ge=1)
    related_product_limit: int = Field(default=3, ge=1)
    per_page_limit: int = Field(default=6, ge=1)
    max_photo_size: int = Field(default=1_000_000, ge=1)


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
