"""Command line entry point: `ephloom info` and `ephloom lookup`."""

import click

from .. import __version__
from . import common
from .info import info
from .lookup import lookup
from ..logging import get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(__version__, prog_name="ephloom")
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="More log output: -v for INFO, -vv for DEBUG",
)
@click.option("--debug", is_flag=True, help="Log at DEBUG level (same as -vv)")
@click.option("--quiet", is_flag=True, help="Only log errors")
def cli(verbose: int, debug: bool, quiet: bool) -> None:
    """Read positions of solar system bodies from JPL ephemeris files."""
    common.configure_logging({"quiet": quiet, "debug": debug, "verbose": verbose})
    logger.debug("Logging at DEBUG level")


cli.add_command(info)
cli.add_command(lookup)

if __name__ == "__main__":
    cli()
