from pydantic import Field
from pydantic_settings import BaseSettings

from byte_scanner.services.scan_engine.defaults import DEFAULT_SEPARATORS

DEVICE_NAME = "scanner"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    default_separators: bytes = Field(default=DEFAULT_SEPARATORS)
    max_sessions: int = Field(default=1024, ge=1)
    max_write_size: int = Field(default=1 << 20, ge=0)
    default_read_capacity: int = Field(default=128, ge=1)
    log_level: str = Field(default="INFO")

    class Config:
        env_prefix = "SCANNER_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()
