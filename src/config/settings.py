from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    # CORS
    cors_allow_origins: str = "*"
    # Identity provider (OIDC, JWKS-verified bearer tokens)
    oidc_issuer: str
    oidc_audience: str | None = None
    jwks_url: str
    jwks_cache_ttl: int = 300
    # Daily reminder trigger
    cron_secret: SecretStr | None = None
    reminder_run_deadline_seconds: float | None = 240.0
    reminder_skip_already_sent: bool = True
    # Web Push (VAPID)
    vapid_public_key: str | None = None
    vapid_private_key: SecretStr | None = None
    vapid_email: str | None = None
    push_timeout_seconds: float = 10.0
    push_ttl_seconds: int = 86400
    push_max_concurrency: int = 8
    app_icon_path: str = "/jaothui-logo.png"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"prod", "production"}

    @property
    def push_configured(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key and self.vapid_email)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
