import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List

env = os.getenv("APP_ENV", "development")
env_file = f".env.{env}"

class Settings(BaseSettings):
    # sqlite+aiosqlite for local work, postgresql+asyncpg in production
    database_url: str = "sqlite+aiosqlite:///./medicall.db"
    api_prefix: str = "/api"
    # CORS origins can be overridden via CORS_ORIGINS env var (JSON list)
    cors_origins: List[str] = Field(default=["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(
        env_file=env_file,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class ClientSettings(BaseSettings):
    """Settings for a headless sync client (env prefix ``MEDICALL_CLIENT_``)."""

    api_url: str = "http://localhost:8080/api"
    socket_url: str = "ws://localhost:8080/ws"
    cache_dir: str = ".medicall_cache"
    request_timeout: float = 10.0

    # live channel reconnection policy
    reconnection_attempts: int = 10
    reconnection_delay: float = 3.0
    timeout: float = 20.0

    model_config = SettingsConfigDict(
        env_prefix="MEDICALL_CLIENT_",
        env_file=env_file,
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
