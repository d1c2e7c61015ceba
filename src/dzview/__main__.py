"""CLI entry point for dzview."""

from __future__ import annotations

import logging
import sys

import click

from dzview.config import DEFAULT_ZOOM_LEVEL
from dzview.core.descriptor import descriptor_fields
from dzview.core.fetch import fetch_descriptor
from dzview.core.session import Session, ZoomIn, ZoomOut, init_session, tiles, update

logger = logging.getLogger(__name__)


def _print_failure(session: Session) -> None:
    """Print the session's fetch or parse error and exit with status 1."""
    if session.fetch_error is not None:
        click.echo(click.style(
            f"Error: could not fetch {session.url}: {session.fetch_error}", fg="red"
        ), err=True)
    elif session.parse_error is not None:
        err = session.parse_error
        click.echo(click.style(
            f"Error: invalid descriptor at line {err.line}, column {err.column}",
            fg="red",
        ), err=True)
        click.echo(f"  expected {err.expected}", err=True)
        click.echo(f"  found    {err.found}", err=True)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Inspect and serve DeepZoom images.

    Examples:

        # Show the descriptor and the tiles displayed at zoom level 2
        python -m dzview inspect http://host/images/photo.dzi -z 2

        # Serve the viewer API for one image
        python -m dzview serve http://host/images/photo.dzi --port 8000
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("url")
@click.option(
    "--zoom",
    "-z",
    type=click.IntRange(min=0),
    default=DEFAULT_ZOOM_LEVEL,
    help=f"Starting zoom level (default: {DEFAULT_ZOOM_LEVEL})",
)
@click.option(
    "--zoom-in",
    "zoom_in",
    type=click.IntRange(min=0),
    default=0,
    help="Number of zoom-in steps to apply after loading",
)
@click.option(
    "--zoom-out",
    "zoom_out",
    type=click.IntRange(min=0),
    default=0,
    help="Number of zoom-out steps to apply after zooming in",
)
def inspect(url: str, zoom: int, zoom_in: int, zoom_out: int) -> None:
    """Fetch a descriptor and list the tiles displayed at a zoom level.

    URL is the address of the .dzi descriptor. Each tile is printed as
    "row col level url".
    """
    session = update(init_session(url, zoom), fetch_descriptor(url))
    if session.descriptor is None:
        _print_failure(session)

    for _ in range(zoom_in):
        session = update(session, ZoomIn())
    for _ in range(zoom_out):
        session = update(session, ZoomOut())

    click.echo(click.style(f"Descriptor: {url}", fg="cyan", bold=True))
    for key, value in descriptor_fields(session.descriptor):
        click.echo(f"  {key}: {value}")
    click.echo()

    grid = tiles(session)
    click.echo(click.style(
        f"Zoom level {session.zoom_level}: {len(grid)} tile(s)", fg="cyan", bold=True
    ))
    for tile in grid:
        click.echo(f"{tile.row} {tile.col} {tile.level} {tile.url}")


@main.command()
@click.argument("url")
@click.option("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
@click.option("--port", "-p", type=int, default=8000, help="Port (default: 8000)")
def serve(url: str, host: str, port: int) -> None:
    """Serve the viewer API for the descriptor at URL."""
    import uvicorn

    from web.server.config import ServerConfig
    from web.server.main import create_app

    app = create_app(ServerConfig(descriptor_url=url, host=host, port=port))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
