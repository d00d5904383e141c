"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy.engine import make_url


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./database.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables: bool = Field(
        default=True, description="Create missing tables on application startup"
    )
    environment_mode: Literal["development", "production", "test"] = Field(
        default="development", description="Environment mode"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        """True for SQLite URLs without a file path (``sqlite://`` or ``:memory:``)."""
        if not self.is_sqlite:
            return False
        database = make_url(self.url).database
        return database in (None, "", ":memory:")

    @property
    def password(self) -> str | None:
        """
        Get the database password from the appropriate source.
        1. A mounted secrets file named by `password_file`
        2. An environment variable named by `password_env_var`
        3. The password embedded in the URL (development and test only)
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e

        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if password:
                return password
            raise ValueError(f"Environment variable {self.password_env_var} not set")

        url_password = make_url(self.url).password
        if url_password and self.environment_mode == "production":
            logger.warning(
                "Database URL contains a password in production mode; "
                "consider using a secrets file or environment variable."
            )
        return url_password

    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        base_url = make_url(self.url)
        if self.is_sqlite:
            return str(base_url)

        resolved_password = self.password
        if resolved_password and resolved_password != base_url.password:
            base_url = base_url.set(password=resolved_password)

        # Render manually to avoid SQLAlchemy's password masking
        return base_url.render_as_string(hide_password=False)


class SecurityConfig(BaseModel):
    """Password hashing parameters."""

    password_hash_iterations: int = Field(
        default=600_000, ge=1, description="PBKDF2 iterations for password hashes"
    )
    password_salt_bytes: int = Field(
        default=16, ge=8, description="Random salt length in bytes"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=3000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    security: SecurityConfig = Field(
        default_factory=SecurityConfig, description="Security configuration"
    )
