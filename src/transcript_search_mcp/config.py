"""Configuration via environment variables."""

from enum import Enum
from typing import Literal

from pydantic_settings import BaseSettings


class Mode(str, Enum):
    STANDALONE = "standalone"
    BACKEND = "backend"


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class Settings(BaseSettings):
    model_config = {"env_prefix": "TRANSCRIPT_SEARCH_"}

    mode: Mode = Mode.STANDALONE
    backend_url: str = "http://localhost:8300"
    backend_api_key: str = ""
    cache_max_size: int = 100
    cache_ttl_seconds: int = 3600
    rate_limit_per_minute: int = 30
    transport: Transport = Transport.STDIO
    # False keeps regex syntax in search terms
    escape_special_characters: bool = False
    max_context_entries: int = 5
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
