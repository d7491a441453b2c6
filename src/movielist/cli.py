"""CLI entry point for the movie list service."""

import json
import sys
from pathlib import Path

import click
import uvicorn
from loguru import logger

from .api.omdb import OmdbClient
from .config import MovieListConfig, load_config
from .errors import ConfigError, TitleSourceError
from .server import create_app
from .service import collect_movies

log = logger.bind(stage="cli")


def _build_config(
    config_file: str | None,
    verbose: bool,
    **overrides,
) -> MovieListConfig:
    """Load config once, exit 1 with a logged cause if it is unusable."""
    # Pass CLI flags as kwargs to avoid env pollution
    kwargs = {k: v for k, v in overrides.items() if v is not None}
    if config_file:
        kwargs["_env_file"] = config_file
    if verbose:
        kwargs["log_level"] = "DEBUG"

    try:
        config = load_config(**kwargs)
    except ConfigError as e:
        log.critical(f"Unable to load configuration: {e}")
        sys.exit(1)

    config.setup_logging()
    return config


_config_option = click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to .env file.",
)
_titles_option = click.option(
    "--titles",
    "titles_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Newline-delimited titles file (default: movies.txt).",
)
_verbose_option = click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")


@click.group()
def main() -> None:
    """Serve a list of movies looked up concurrently from OMDb."""


@main.command()
@click.option("--host", default=None, help="Bind address (default: 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Bind port (default: 3000).")
@_titles_option
@_verbose_option
@_config_option
def serve(
    host: str | None,
    port: int | None,
    titles_file: Path | None,
    verbose: bool,
    config_file: str | None,
) -> None:
    """Run the HTTP API."""
    config = _build_config(
        config_file, verbose, host=host, port=port, titles_file=titles_file
    )
    app = create_app(config)

    log.info(f"Serving on {config.host}:{config.port} titles={config.titles_file}")
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


@main.command()
@_titles_option
@_verbose_option
@_config_option
def fetch(titles_file: Path | None, verbose: bool, config_file: str | None) -> None:
    """Look up every title once and print the resolved movies as JSON."""
    config = _build_config(config_file, verbose, titles_file=titles_file)

    try:
        with OmdbClient(config) as client:
            result = collect_movies(
                config.titles_file,
                client.fetch,
                max_concurrency=config.max_concurrent_lookups,
            )
    except TitleSourceError as e:
        log.error(str(e))
        sys.exit(1)

    click.echo(json.dumps([r.to_dict() for r in result.records], indent=2))
    click.echo(
        f"{result.succeeded} of {result.total} titles resolved, {result.failed} failed",
        err=True,
    )
