#!/usr/bin/env python3
"""
Main CLI entry point for the feedback API server.
"""

import os
import sys

import click
import uvicorn

from . import __version__
from .logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="feedback-service")
def cli() -> None:
    """Feedback service CLI - run the API server."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8088, type=int, help="Port to bind to (default: 8088)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the feedback API server."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info(
        "Starting feedback API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Worker processes import the app themselves and read settings from the environment
    if log_level == "debug":
        os.environ["FEEDBACK_DEBUG"] = "true"
        os.environ["FEEDBACK_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("FEEDBACK_DEBUG", "false")
        os.environ.setdefault("FEEDBACK_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "feedback_service.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=(workers if not reload else 1),
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
