"""Application configuration for the Medical Diagnosis gateway.

Configuration is loaded from environment variables (or a local ``.env``),
making the service suitable for container-based deployments. Settings are
frozen once loaded; the ApiMedic portion is handed to the gateway as an
immutable :class:`ApiMedicConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ApiMedicConfig:
    """Connection details for the upstream ApiMedic diagnosis API."""

    base_url: str
    auth_url: str
    username: str
    password: str
    language: str
    mock_enabled: bool
    timeout_seconds: float = 10.0
    diagnosis_auth_scheme: str = "Bearer"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True)

    apimedic_base_url: str = "https://sandbox-healthservice.priaid.ch"
    apimedic_auth_url: str = "https://sandbox-authservice.priaid.ch/login"
    apimedic_username: str = ""
    apimedic_password: str = ""
    apimedic_language: str = "en-gb"
    apimedic_mock_enabled: bool = True
    apimedic_timeout_seconds: float = 10.0
    # The legacy deployment sent "Bear" on the diagnosis call.
    apimedic_diagnosis_auth_scheme: str = "Bearer"

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "medical_diagnosis"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"

    database_url: str | None = None

    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    @property
    def sqlalchemy_database_uri(self) -> str:
        if self.database_url:
            return self.database_url

        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def apimedic(self) -> ApiMedicConfig:
        return ApiMedicConfig(
            base_url=self.apimedic_base_url.rstrip("/"),
            auth_url=self.apimedic_auth_url,
            username=self.apimedic_username,
            password=self.apimedic_password,
            language=self.apimedic_language,
            mock_enabled=self.apimedic_mock_enabled,
            timeout_seconds=self.apimedic_timeout_seconds,
            diagnosis_auth_scheme=self.apimedic_diagnosis_auth_scheme,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
