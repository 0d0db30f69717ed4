"""Client settings loaded from environment."""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime client settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PODOCARE_",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Podocare"
    app_env: str = "development"
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:3000/api"
    api_token: str | None = None
    request_timeout_seconds: float = Field(default=15.0, gt=0)

    default_page_size: int = Field(default=15, ge=1)

    @field_validator("api_base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, value: object) -> object:
        """Strip whitespace and trailing slashes so endpoints join cleanly."""
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    @field_validator("api_token", mode="before")
    @classmethod
    def blank_token_is_none(cls, value: object) -> object:
        """Treat empty env values as an absent token."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def validate_for_environment(self) -> "Settings":
        """Block plain-HTTP backends in production-like environments."""
        env_name = self.app_env.strip().lower()
        if env_name not in {"production", "prod"}:
            return self

        if not self.api_base_url.lower().startswith("https://"):
            raise ValueError(
                "PODOCARE_API_BASE_URL must use https:// in production environment",
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
