import logging
import os
import time
from typing import Optional

import typer

from . import parse_secret
from .exceptions import OTPError
from .totp import generate

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="otpkit",
    help="Print the current TOTP code for a base32 secret or otpauth:// URI",
    add_completion=False,
)


def configure_logging(verbose: bool = False) -> None:
    """
    Sends ``otpkit`` log records to stderr. The level is DEBUG with
    ``--verbose``, else ``OTPKIT_LOG_LEVEL``, else WARNING.
    """
    level_name = "DEBUG" if verbose else os.getenv("OTPKIT_LOG_LEVEL", "WARNING")
    package_logger = logging.getLogger("otpkit")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    package_logger.addHandler(handler)
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    package_logger.setLevel(level)


@app.command()
def totp(
    secret: Optional[str] = typer.Argument(
        None,
        envvar="OTPKIT_SECRET",
        show_envvar=True,
        help="Base32 secret or otpauth://totp/ URI; '-' reads it from stdin",
    ),
    at: Optional[float] = typer.Option(None, "--at", help="Unix time to generate the code for (default: now)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
) -> None:
    configure_logging(verbose)

    if secret == "-":
        secret = typer.get_text_stream("stdin").read().strip()
    if not secret:
        typer.echo("Error: no secret given", err=True)
        raise typer.Exit(code=1)

    for_time = time.time() if at is None else at
    try:
        params = parse_secret(secret)
        logger.debug("Generating code with %r at %s", params, for_time)
        code = generate(params, for_time)
    except OTPError as e:
        logger.debug("Secret rejected: %s: %s", type(e).__name__, e)
        typer.echo("Error: {}".format(e), err=True)
        raise typer.Exit(code=1)

    typer.echo(code)


def main() -> None:
    app()
