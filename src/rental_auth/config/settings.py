"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveInt = Annotated[int, Field(gt=0)]
WorkFactor = Annotated[int, Field(ge=4, le=31)]
PasswordLength = Annotated[int, Field(ge=1, le=72)]


class Settings(BaseSettings):
    """Environment-driven authentication settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    password_work_factor: WorkFactor = Field(
        default=12,
        validation_alias="PASSWORD_WORK_FACTOR",
    )
    password_min_length: PasswordLength = Field(
        default=8,
        validation_alias="PASSWORD_MIN_LENGTH",
    )
    password_max_length: PasswordLength = Field(
        default=72,
        validation_alias="PASSWORD_MAX_LENGTH",
    )
    require_verified_email: bool = Field(
        default=False,
        validation_alias="REQUIRE_VERIFIED_EMAIL",
    )
    session_max_age_seconds: PositiveInt = Field(
        default=30 * 24 * 60 * 60,
        validation_alias="SESSION_MAX_AGE_SECONDS",
    )
    database_url: NonEmptyStr = Field(
        default="sqlite+aiosqlite:///./rental_auth.db",
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @model_validator(mode="after")
    def _check_length_bounds(self) -> Self:
        if self.password_min_length > self.password_max_length:
            raise ValueError("PASSWORD_MIN_LENGTH must not exceed PASSWORD_MAX_LENGTH")
        return self


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
