"""Startup orchestrator — parse flags, show the active config, and serve."""

from __future__ import annotations

import argparse
import logging

import uvicorn
from pydantic import ValidationError

from webhook_probe import __version__
from webhook_probe.config import Settings, get_settings
from webhook_probe.webhook.consumer import create_consumer_app

logger = logging.getLogger(__name__)

_RULE = "-" * 56


def build_parser(defaults: Settings | None = None) -> argparse.ArgumentParser:
    """Return the command-line parser; *defaults* come from the environment."""
    defaults = defaults or get_settings()
    parser = argparse.ArgumentParser(
        prog="webhook-probe",
        description="Log every inbound webhook and check its X-Super-Signature header.",
    )
    parser.add_argument("-s", "--secret", default=defaults.secret, help="verification secret key (default: %(default)s)")
    parser.add_argument("-p", "--port", type=int, default=defaults.port, help="server listening port (default: %(default)s)")
    parser.add_argument("--host", default=defaults.host, help="bind address (default: %(default)s)")
    parser.add_argument("--log-level", default=defaults.log_level, help="logging level (default: %(default)s)")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build the frozen settings from parsed flags.

    Raises
    ------
    pydantic.ValidationError
        If a value is out of range (e.g. a port above 65535).
    """
    return Settings(
        secret=args.secret,
        port=args.port,
        host=args.host,
        log_level=args.log_level,
    )


def render_banner(settings: Settings) -> str:
    """Return the startup banner; the secret is shown exactly as configured."""
    return "\n".join([
        _RULE,
        f"Active Secret:   '{settings.secret}'",
        f"Listening Port:  {settings.port}",
        _RULE,
    ])


def _setup_logging(level: str) -> None:
    """Configure root logger with a human-friendly format."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: list[str] | None = None) -> None:
    """Entry-point: read configuration, print it, then serve."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValidationError as exc:
        parser.error(str(exc))

    _setup_logging(settings.log_level)

    print(render_banner(settings))

    app = create_consumer_app(settings)

    logger.info("Starting webhook probe on %s:%d", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
