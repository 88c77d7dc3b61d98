"""Configuration schema using Pydantic."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kbgate.safety.policy import AccessLevel, AccessPolicy


class Base(BaseModel):
    """Base model with convenient defaults."""

    model_config = ConfigDict(populate_by_name=True)


class DatabaseConfig(Base):
    """Database connection configuration."""

    type: Literal["kingbase", "postgresql"] = "kingbase"
    host: str = "localhost"
    port: int = 54321
    database: str = "kingbase"
    user: str = "system"
    password: str = ""
    pool_min_size: int = Field(default=1, ge=0)
    pool_max_size: int = Field(default=5, ge=1)
    connect_timeout: float = 10.0


class AccessConfig(Base):
    """Access level and schema resolution."""

    mode: AccessLevel = AccessLevel.READONLY
    default_schema: str = "public"

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: object) -> AccessLevel:
        # Invalid names fall back to readonly with a warning, never an error.
        return AccessLevel.parse(value)

    @field_validator("default_schema", mode="before")
    @classmethod
    def _default_schema(cls, value: object) -> str:
        return str(value).strip() if value and str(value).strip() else "public"

    @field_serializer("mode")
    def _serialize_mode(self, mode: AccessLevel) -> str:
        return mode.label

    def policy(self) -> AccessPolicy:
        return AccessPolicy(self.mode)


class LimitsConfig(Base):
    """Row paging and output size limits."""

    default_row_limit: int = Field(default=100, ge=1)
    max_row_limit: int = Field(default=1000, ge=1)
    character_limit: int = Field(default=50000, ge=100)


class ServerConfig(Base):
    """MCP transport configuration."""

    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 3000

    @field_validator("transport", mode="before")
    @classmethod
    def _lower(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value


class Config(BaseSettings):
    """Root configuration for kbgate."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    access: AccessConfig = Field(default_factory=AccessConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = SettingsConfigDict(env_prefix="KBGATE_", env_nested_delimiter="__")
