"""CLI command for position lookups."""

from typing import Optional, Tuple

import click

from ..bodies import Body
from ..errors import EphemerisError
from ..flags import AngleUnit, Center, RequestFlags, Shape
from ..jpl import EphemerisSession
from ..logging import get_logger
from ..space_time.delta_t import ut_to_et
from .common import format_julian_date, parse_date_input

logger = get_logger(__name__)


def parse_body(value: str) -> Body:
    try:
        return Body.from_name(value)
    except ValueError:
        raise click.BadParameter(
            f"Invalid body: {value}. Choose from: {', '.join(b.value for b in Body)}"
        )


@click.command()
@click.argument("file")
@click.argument("body")
@click.option(
    "--center",
    "-c",
    default=Body.SOLAR_SYSTEM_BARYCENTER.value,
    help="Body the result is relative to. Defaults to the solar system barycenter.",
)
@click.option(
    "--date",
    "-d",
    multiple=True,
    default=("now",),
    help="Date(s) to look up. Can be specified multiple times. Use ISO format or Julian date.",
)
@click.option("--heliocentric", is_flag=True, help="Use the Sun as center.")
@click.option("--xyz", is_flag=True, help="Print Cartesian coordinates instead of polar.")
@click.option("--radians", is_flag=True, help="Print polar angles in radians.")
@click.option("--no-speed", is_flag=True, help="Don't compute velocities.")
@click.option("--ut", is_flag=True, help="Dates are universal time; convert to dynamical time.")
@click.option(
    "--ephe-path",
    help="Directories to search for FILE, separated like PATH.",
)
def lookup(
    file: str,
    body: str,
    center: str,
    date: Tuple[str, ...],
    heliocentric: bool,
    xyz: bool,
    radians: bool,
    no_speed: bool,
    ut: bool,
    ephe_path: Optional[str] = None,
) -> None:
    """Look up the position of BODY in ephemeris FILE.

    Examples:

    Barycentric polar position of Mars:
       ephloom lookup de430.bin mars --date 2451545.0

    Cartesian position of the Moon relative to the Earth:
       ephloom lookup de430.bin moon --center earth --xyz --date 2024-01-01T00:00:00
    """
    target = parse_body(body)
    center_body = parse_body(center)

    flags = RequestFlags(
        center=Center.HELIOCENTRIC if heliocentric else Center.BARYCENTRIC,
        shape=Shape.CARTESIAN if xyz else Shape.POLAR,
        angle_unit=AngleUnit.RADIANS if radians else AngleUnit.DEGREES,
        velocity=not no_speed,
    )

    try:
        dates = [parse_date_input(d) for d in date]
    except ValueError as e:
        raise click.BadParameter(str(e))

    if xyz:
        columns = ("x", "y", "z", "vx", "vy", "vz")
    else:
        columns = ("lon", "lat", "dist", "dlon", "dlat", "ddist")

    try:
        with EphemerisSession(file, search_path=ephe_path, cache_size=4) as session:
            click.echo("jd,date," + ",".join(columns))
            for jd in dates:
                et = ut_to_et(jd) if ut else jd
                logger.debug(f"Looking up {target.name} at JD {et}")
                values = session.lookup(et, target, center_body, flags)
                row = ",".join(f"{v:.10f}" for v in values)
                click.echo(f"{jd:.6f},{format_julian_date(jd)},{row}")
    except EphemerisError as e:
        raise click.ClickException(str(e))
