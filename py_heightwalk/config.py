"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="json", pattern="^(json|plain)$", description="Logging format (plain or json)"
    )

    # Generation
    max_workers: int = Field(
        default=4, ge=1, description="Worker threads for batch level generation"
    )

    class Config:
        env_prefix = "HEIGHTWALK_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
