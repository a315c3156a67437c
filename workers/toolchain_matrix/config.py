"""
Runner configuration
"""
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """Runner settings, read from MATRIX_* environment variables or .env"""

    # Toolchain
    TOOLCHAIN_PROGRAM: str = "cargo"
    PINNED_TOOLCHAIN: str = "1.31.0"
    STABLE_TOOLCHAIN: str = "stable"

    # Paths
    PROJECT_DIR: str | None = None
    RECEIPT_DIR: str | None = None

    # Output
    CAPTURE_OUTPUT: bool = False
    LOG_LEVEL: LogLevel = "INFO"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        """Accept ``info`` as well as ``INFO``."""
        return value.upper() if isinstance(value, str) else value

    class Config:
        env_prefix = "MATRIX_"
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
