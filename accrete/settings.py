from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

__all__ = ("Settings", "settings")


class Settings(BaseSettings):
    model_config = {"env_prefix": "ACCRETE_"}

    DEFAULT_LIMIT: int = Field(default=20, gt=0)
    """Page size used when a paginator is built without an explicit limit."""

    SCROLL_THRESHOLD: float = Field(default=0.8, gt=0, lt=1)
    """Scroll fraction after which the next page is requested."""

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


settings = Settings()
