"""
Database configuration settings.

Manages PostgreSQL connection parameters for SQLAlchemy.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the metadata repository
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from library_ingest.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="library_ingest", description="PostgreSQL database name")
    url: str = Field(
        default="",
        description="Full SQLAlchemy URL; overrides the individual connection parts",
    )

    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def database_url(self) -> str:
        """
        Construct the SQLAlchemy connection URL.

        Returns:
            str: Explicit url when set, otherwise a psycopg PostgreSQL URL
        """
        if self.url:
            return self.url
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )
