from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..mongo.options import MongoOptions
    from ..sql.options import SqlOptions

EnvironmentName = Literal["development", "test", "ci"]

_ENVIRONMENT_ALIASES: dict[str, EnvironmentName] = {
    "development": "development",
    "dev": "development",
    "test": "test",
    "testing": "test",
    "ci": "ci",
}

_ENVIRONMENT_PROFILES: dict[EnvironmentName, dict[str, Any]] = {
    "development": {
        "log_level": "DEBUG",
        "log_json": False,
        "db_echo": False,
    },
    "test": {
        "log_level": "WARNING",
        "log_json": False,
        "db_echo": False,
    },
    "ci": {
        "log_level": "INFO",
        "log_json": True,
        "db_echo": False,
    },
}


class Settings(BaseSettings):
    """Runtime configuration for sessions, providers and logging."""

    model_config = SettingsConfigDict(
        env_prefix="TXCOMMAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "txcommand"
    environment: EnvironmentName = Field(default="development")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    database_url: str = Field(default="sqlite:///txcommand.db")
    db_echo: bool = Field(default=False)
    sql_isolation_level: str = Field(default="READ UNCOMMITTED")

    mongo_url: str = Field(default="mongodb://localhost:27017")
    mongo_database: str = Field(default="txcommand")
    mongo_causal_consistency: bool | None = Field(default=None)
    mongo_max_commit_time_ms: int | None = Field(default=None)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalise_environment(cls, value: object) -> EnvironmentName:
        if isinstance(value, str):
            normalized = value.strip().lower()
        else:
            normalized = ""
        if not normalized:
            normalized = "development"
        mapped = _ENVIRONMENT_ALIASES.get(normalized)
        if mapped is not None:
            return mapped
        return "development"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str):
            return "INFO"
        return value.upper()

    @field_validator("sql_isolation_level", mode="before")
    @classmethod
    def _normalise_isolation_level(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            return "READ UNCOMMITTED"
        return " ".join(value.replace("_", " ").upper().split())

    @field_validator("mongo_max_commit_time_ms", mode="before")
    @classmethod
    def _normalise_max_commit_time(cls, value: object) -> int | None:
        if value is None or value == "":
            return None
        try:
            parsed = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        return parsed if parsed >= 0 else None

    @model_validator(mode="after")
    def _apply_environment_profile(self) -> "Settings":
        profile = _ENVIRONMENT_PROFILES[self.environment]
        fields_set = set(getattr(self, "model_fields_set", set()))
        for field_name, value in profile.items():
            if field_name not in fields_set:
                setattr(self, field_name, value)
        return self

    def sql_options(self) -> "SqlOptions":
        """Build relational provider options from the configured values."""

        from ..sql.options import IsolationLevel, SqlOptions

        return SqlOptions(isolation_level=IsolationLevel(self.sql_isolation_level))

    def mongo_options(self) -> "MongoOptions":
        """Build document-store provider options from the configured values."""

        from ..mongo.options import MongoOptions

        return MongoOptions.build(
            causal_consistency=self.mongo_causal_consistency,
            max_commit_time_ms=self.mongo_max_commit_time_ms,
        )


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()
