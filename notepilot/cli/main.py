# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from .. import __version__
from ..constant import LOG_LEVEL_ENV, WORKING_DIR
from .app_cmd import app_cmd
from .copilot_cmd import ask_cmd, config_cmd, schema_cmd, verify_cmd
from .providers_cmd import providers_group

logger = logging.getLogger(__name__)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.version_option(__version__, prog_name="notepilot")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help=f"Log level (default: ${LOG_LEVEL_ENV} or warning)",
)
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="settings.json to use instead of the working directory's",
)
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: Optional[str],
    settings_file: Optional[Path],
) -> None:
    """NotePilot: send notes to an LLM provider and get replies back."""
    env_path = WORKING_DIR / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    level = (log_level or os.environ.get(LOG_LEVEL_ENV, "warning")).lower()
    setup_logging(level)
    logger.debug("Working dir: %s", WORKING_DIR)
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = level
    ctx.obj["settings_path"] = settings_file


cli.add_command(providers_group)
cli.add_command(config_cmd)
cli.add_command(verify_cmd)
cli.add_command(ask_cmd)
cli.add_command(schema_cmd)
cli.add_command(app_cmd)


if __name__ == "__main__":
    cli()
