from functools import lru_cache

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="Healthcare Reservation Gateway")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8290)
    hospital_service_url: AnyHttpUrl = Field(
        default="http://localhost:9090"
    )
    payment_service_url: AnyHttpUrl = Field(
        default="http://localhost:9090/healthcare/payments"
    )
    grand_oak_service_url: AnyHttpUrl = Field(
        default="http://localhost:9090/grandoaks"
    )
    clemency_service_url: AnyHttpUrl = Field(
        default="http://localhost:9090/clemency"
    )
    pine_valley_service_url: AnyHttpUrl = Field(
        default="http://localhost:9090/pinevalley"
    )
    backend_timeout: float = Field(
        default=10.0
    )
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_prefix="HEALTHCARE_", case_sensitive=False)

    @field_validator("log_level", mode="before")
    def _normalise_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
