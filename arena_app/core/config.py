from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from arena_app.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    REQUEST_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
    SANDBOX_HOST,
    SANDBOX_PORT,
)
from arena_app.constants.quiz_constants import DEFAULT_PASSING_PERCENTAGE


class Settings(BaseSettings):
    """Runtime configuration, overridable through ARENA_* environment variables or .env."""

    # Remote API
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS
    request_retries: int = REQUEST_RETRIES

    # Quiz rules applied client-side
    default_passing_percentage: int = DEFAULT_PASSING_PERCENTAGE
    attempt_time_limit_seconds: Optional[int] = None

    # Local sandbox API for development
    use_sandbox: bool = False
    sandbox_host: str = SANDBOX_HOST
    sandbox_port: int = SANDBOX_PORT

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="ARENA_", env_file=".env", extra="ignore")

    @property
    def effective_api_base_url(self) -> str:
        if self.use_sandbox:
            return f"http://{self.sandbox_host}:{self.sandbox_port}/api"
        return self.api_base_url.rstrip("/")


def load_settings() -> Settings:
    return Settings()
