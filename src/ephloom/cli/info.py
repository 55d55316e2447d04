"""CLI command describing an ephemeris file."""

from typing import Optional

import click

from ..errors import EphemerisError
from ..jpl import EphemerisSession


@click.command()
@click.argument("file")
@click.option(
    "--ephe-path",
    help="Directories to search for FILE, separated like PATH.",
)
def info(file: str, ephe_path: Optional[str] = None) -> None:
    """Show the validity interval, constants and series layout of FILE.

    Example:

       ephloom info de430.bin
    """
    try:
        with EphemerisSession(file, search_path=ephe_path) as session:
            details = session.get_info()
    except EphemerisError as e:
        raise click.ClickException(str(e))

    click.echo(f"File:        {details['path']}")
    click.echo(f"DE number:   {details['de_number']}")
    click.echo(f"Valid from:  JD {details['valid_start']:.1f}")
    click.echo(f"Valid to:    JD {details['valid_end']:.1f}")
    click.echo(f"Step:        {details['step_days']:g} days ({details['record_count']} records)")
    click.echo(f"AU:          {details['au']:.3f} km")
    click.echo(f"Earth/Moon:  {details['earth_moon_mass_ratio']:.9f}")
    click.echo("")
    click.echo(f"{'Body':<24}{'Offset':>8}{'Coeffs':>8}{'Subint':>8}")
    for name, entry in details["layout"].items():
        click.echo(
            f"{name:<24}{entry.offset:>8}{entry.coefficient_count:>8}{entry.sub_intervals:>8}"
        )
