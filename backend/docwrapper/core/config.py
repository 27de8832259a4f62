from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "docwrapper"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # TODO: read credentials from a secret store instead of embedding them in the URI
    MONGODB_URI: str = "mongodb://mongodb:27017"
    MONGODB_DATABASE: str = "demo"
    MONGODB_COLLECTION: str = "test"
    MONGODB_MAX_POOL_SIZE: int = 300
    MONGODB_CONNECT_TIMEOUT: float = 10.0

    # Seconds
    LOOKUP_TIMEOUT: float = 2.0
    SHUTDOWN_TIMEOUT: float = 5.0

    DEFAULT_DOCUMENT_ID: str = "1"
    LOG_LOOKUP_ERRORS: bool = True

    @field_validator("MONGODB_MAX_POOL_SIZE")
    @classmethod
    def _positive_pool_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("MONGODB_MAX_POOL_SIZE must be greater than 0")
        return v

    @field_validator("MONGODB_CONNECT_TIMEOUT", "LOOKUP_TIMEOUT", "SHUTDOWN_TIMEOUT")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be greater than 0")
        return v


settings = Settings()  # type: ignore
