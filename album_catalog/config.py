"""
Configuration settings for the Album Catalog.

Uses Pydantic Settings to load environment variables for the database
connection, logging, and the web server. Database credentials keep the
`DBUSER` / `DBPASS` names the deployment scripts already export.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_host: str = Field("127.0.0.1", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DBUSER")
    db_password: str = Field("postgres", alias="DBPASS")
    db_name: str = Field("recordings", alias="DB_NAME")
    db_pool_min_size: int = Field(1, alias="DB_POOL_MIN_SIZE")
    db_pool_max_size: int = Field(10, alias="DB_POOL_MAX_SIZE")
    db_statement_timeout_ms: int = Field(5_000, alias="DB_STATEMENT_TIMEOUT_MS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Web
    http_host: str = Field("127.0.0.1", alias="HTTP_HOST")
    http_port: int = Field(8080, alias="HTTP_PORT")
    secret_key: str = Field("dev-secret-key", alias="SECRET_KEY")
    dump_limit: int = Field(50, alias="DUMP_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
