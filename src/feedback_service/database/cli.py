#!/usr/bin/env python3
"""
CLI entry point for feedback database migrations.
"""

import sys
from pathlib import Path

import click

from alembic import command
from alembic.config import Config

from .. import __version__
from ..logging import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_ALEMBIC_INI = Path(__file__).parents[3] / "alembic.ini"


def run_alembic(action: str, fn, config: Config, *args, **kwargs) -> None:
    """Run an alembic command, exiting with status 1 on failure."""
    try:
        fn(config, *args, **kwargs)
    except Exception as e:
        logger.error("Migration command failed", action=action, error=str(e))
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    default=DEFAULT_ALEMBIC_INI,
    envvar="FEEDBACK_ALEMBIC_INI",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to alembic.ini (default: project root)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="feedback-migrate")
@click.pass_context
def main(ctx: click.Context, config_path: Path, log_level: str) -> None:
    """Feedback database migration management."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)
    ctx.obj = Config(str(config_path))


@main.command()
@click.argument("revision", default="head")
@click.pass_obj
def upgrade(config: Config, revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    logger.info("Upgrading database", revision=revision)
    run_alembic("upgrade", command.upgrade, config, revision)
    logger.info("Database upgrade completed successfully")


@main.command()
@click.argument("revision", default="-1")
@click.pass_obj
def downgrade(config: Config, revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    logger.info("Downgrading database", revision=revision)
    run_alembic("downgrade", command.downgrade, config, revision)
    logger.info("Database downgrade completed successfully")


@main.command()
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Auto-generate migration")
@click.pass_obj
def revision(config: Config, message: str, autogenerate: bool) -> None:
    """Create a new migration revision."""
    run_alembic("revision", command.revision, config, message=message, autogenerate=autogenerate)


@main.command()
@click.pass_obj
def current(config: Config) -> None:
    """Show current database revision."""
    run_alembic("current", command.current, config)


@main.command()
@click.pass_obj
def history(config: Config) -> None:
    """Show migration history."""
    run_alembic("history", command.history, config)


if __name__ == "__main__":
    main()
