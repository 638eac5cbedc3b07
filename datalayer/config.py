import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Client settings loaded from environment variables (prefix ``DATALAYER_``)."""

    # Remote service addressing. The base URL is read once when a client
    # builds its own httpx.AsyncClient; changing it mid-flight has no effect
    # on requests already sent.
    base_url: str = "http://localhost:5000"
    api_prefix: str = "/api"
    timeout_seconds: float = 30.0

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_client: str = "INFO"           # datalayer CRUD clients

    model_config = {
        "env_prefix": "DATALAYER_",
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalise the route prefix so it always starts with a single slash."""
        prefix = "/" + self.api_prefix.strip("/") if self.api_prefix.strip("/") else ""
        if prefix != self.api_prefix:
            _config_logger.debug("Normalised api_prefix %r -> %r", self.api_prefix, prefix)
            object.__setattr__(self, "api_prefix", prefix)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
