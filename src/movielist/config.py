"""Service configuration via pydantic-settings (.env + env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import DEFAULT_MAX_CONCURRENCY


class MovieListConfig(BaseSettings):
    """All service configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # -- Provider --
    api_key: str
    omdb_base_url: str = "http://www.omdbapi.com/"
    request_timeout: float = Field(10.0, gt=0)

    # -- Fan-out --
    max_concurrent_lookups: int = Field(DEFAULT_MAX_CONCURRENCY, ge=1)

    # -- Inputs --
    titles_file: Path = Path("movies.txt")
    static_dir: Path = Path("views")

    # -- Server --
    host: str = "0.0.0.0"
    port: int = 3000

    # -- Logging --
    log_level: str = "INFO"
    log_dir: Path | None = None

    def setup_logging(self) -> None:
        """Configure loguru for the service."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<8} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level=self.log_level.upper(),
            filter=_default_extra,
        )

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "movielist.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )


def load_config(**overrides) -> MovieListConfig:
    """Build the config once at startup.

    Raises ConfigError when a required value (API_KEY) is missing or a value
    fails validation.
    """
    try:
        return MovieListConfig(**overrides)
    except ValidationError as e:
        missing = [
            ".".join(str(p) for p in err["loc"]).upper()
            for err in e.errors()
            if err["type"] == "missing"
        ]
        if missing:
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}"
            ) from e
        raise ConfigError(f"Invalid configuration: {e}") from e
