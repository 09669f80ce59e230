import functools
import logging
from typing import Any, Callable, Tuple, TypeVar, cast

import click

from .. import APP_NAME, __version__, config
from ..catalog import Catalog, build_catalog
from ..exceptions import LensCatalogException
from ..models import FORMAT_CROP, FORMAT_FULL
from ..sources import load_sources

F = TypeVar("F", bound=Callable[..., Any])

_help_source = (
    "JSON source dataset, or a directory of them. Can be repeated."
    f" Defaults to the files in {config['sources_dir']}."
)


@click.group()
@click.option(
    "-s",
    "--source",
    "sources",
    type=click.Path(dir_okay=True),
    multiple=True,
    envvar=config["sources_envvar"],
    help=_help_source,
)
@click.option("-v", "--verbose", count=True, help="Log more; repeat for debug logs.")
@click.version_option(__version__, prog_name=APP_NAME)
@click.pass_context
def main(ctx: click.Context, sources: Tuple[str, ...], verbose: int) -> None:
    """Filter, compare and export optical specifications of lenses."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s: %(name)s: %(message)s")

    obj = ctx.ensure_object(dict)
    obj["sources"] = sources or (str(config["sources_dir"]),)


def get_catalog(ctx: click.Context) -> Catalog:
    """Build the catalog on first use and keep it for the rest of the command."""
    obj = ctx.ensure_object(dict)
    if obj.get("catalog") is None:
        datasets = load_sources(obj.get("sources", ()))
        obj["catalog"] = build_catalog(datasets)
    return cast(Catalog, obj["catalog"])


def report_errors(f: F) -> F:
    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except LensCatalogException as ex:
            click.secho(str(ex), fg="red", err=True)
            click.get_current_context().exit(1)

    return cast(F, wrapper)


def filter_options(f: F) -> F:
    options = [
        click.option(
            "-m", "--manufacturer", "manufacturers", multiple=True, metavar="NAME"
        ),
        click.option("--mount", "mounts", multiple=True, metavar="NAME"),
        click.option(
            "--format",
            "formats",
            multiple=True,
            type=click.Choice([FORMAT_FULL, FORMAT_CROP], case_sensitive=False),
        ),
        click.option("--id", "ids", type=int, multiple=True, metavar="ID"),
        click.option(
            "--teleconverter",
            "teleconverter_compatible",
            type=click.BOOL,
            default=None,
            metavar="yes|no",
            help="Only lenses supporting (or not supporting) teleconverters.",
        ),
        click.option(
            "--resolved-only",
            is_flag=True,
            help="Skip lenses having values that could not be derived.",
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


# Import subcommand modules after defining main so that they can refer it
from . import export  # noqa: E402, F401
from . import query  # noqa: E402, F401
