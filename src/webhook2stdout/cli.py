"""Command-line entry point.

Usage:
    webhook2stdout [--config config.yaml]

Loads the config (a missing file means defaults), configures logging and
serves the receiver with uvicorn until interrupted.
"""

from __future__ import annotations

import sys

import click
import structlog
import uvicorn

from webhook2stdout import __version__
from webhook2stdout._app import create_app
from webhook2stdout._config import ConfigParseError, InvalidConfigError, load_config
from webhook2stdout._logging import configure_logging

log = structlog.get_logger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    default="config.yaml",
    show_default=True,
    help="Path to YAML or JSON config file",
)
@click.version_option(__version__, prog_name="webhook2stdout")
def main(config_path: str) -> None:
    """Log every request to the configured route as a JSON line on stdout."""
    try:
        config = load_config(config_path)
    except ConfigParseError as exc:
        click.echo(f"failed to load config: {exc}", err=True)
        sys.exit(1)
    except InvalidConfigError as exc:
        click.echo(f"invalid config: {exc}", err=True)
        sys.exit(1)

    configure_logging(json_output=config.log_json, level=config.level)
    for key in config.duplicate_keys():
        log.warning("duplicate output key; last mapping wins", key=key)
    app = create_app(config)

    log.debug("listening", address=f"{config.host}:{config.port}", route=config.route)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_config=None,
        access_log=False,
        server_header=False,
    )
