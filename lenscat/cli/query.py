"""Commands to look up lenses in the catalog."""
from typing import Any, Iterable, Optional, Tuple

import click

from .. import optics, query, views
from ..catalog import focal_range
from ..models import FilterCriteria, Lens, LensSpecification
from . import filter_options, get_catalog, main, report_errors


def _format_magnification(magnification: Optional[float]) -> str:
    if magnification is None:
        return "?"
    if magnification <= 0:
        return "-"
    return optics.format_magnification_ratio(magnification)


def _format_value(value: Optional[float], fmt: str = "g") -> str:
    return "?" if value is None else format(value, fmt)


def _describe(lens: Lens) -> str:
    lo, hi = focal_range(lens)
    focal = f"{lo:g}mm" if lo == hi else f"{lo:g}-{hi:g}mm"
    line = f"{lens.id:>5}  {lens.manufacturer} {lens.mount}  {lens.model}  {focal}"
    if not query.is_resolved(lens):
        line += "  (incomplete)"
    return line


def _echo_specs(specs: Iterable[LensSpecification]) -> None:
    for spec in specs:
        prefix = f"{spec.teleconverter:g}x " if spec.teleconverter else ""
        click.echo(
            f"  {prefix}{spec.focal_length:g}mm"
            f"  f/{_format_value(spec.aperture)}"
            f"  {spec.min_focus:g}m"
            f"  {_format_magnification(spec.magnification)}"
        )


@main.command(name="list")
@filter_options
@click.option(
    "--sort",
    type=click.Choice(["catalog", "max-focal"]),
    default="catalog",
    show_default=True,
    help="Order of the listed lenses.",
)
@click.pass_context
@report_errors
def list_(ctx: click.Context, sort: str, **filters: Any) -> None:
    """List lenses matching all given filters."""
    catalog = get_catalog(ctx)
    lenses = query.filter_lenses(catalog, FilterCriteria(**filters))
    if sort == "max-focal":
        lenses = views.sort_by_max_focal_length(lenses)
    for lens in lenses:
        click.echo(_describe(lens))


@main.command()
@click.pass_context
@report_errors
def facets(ctx: click.Context) -> None:
    """Show manufacturers and mounts found in the catalog."""
    catalog = get_catalog(ctx)
    click.echo("Manufacturers: " + ", ".join(query.distinct_manufacturers(catalog)))
    click.echo("Mounts: " + ", ".join(query.distinct_mounts(catalog)))


@main.command()
@click.argument("lens_id", type=int)
@click.pass_context
@report_errors
def show(ctx: click.Context, lens_id: int) -> None:
    """Show specifications of a lens, with teleconverters if it supports any."""
    catalog = get_catalog(ctx)
    found = query.by_ids(catalog, [lens_id])
    if not found:
        click.secho(f"no lens with id {lens_id}", fg="yellow", err=True)
        ctx.exit(1)
    lens = found[0]

    click.echo(_describe(lens))
    _echo_specs(lens.data)
    if any(spec.magnification is not None for spec in lens.data):
        best = views.get_max_magnification_with_focal_length(lens)
        macro = " (macro)" if optics.is_macro_capable(best.magnification) else ""
        click.echo(
            f"Max magnification: {_format_magnification(best.magnification)}"
            f" at {best.focal_length:g}mm{macro}"
        )
    if lens.teleconverters:
        click.echo("With teleconverters:")
        _echo_specs(optics.teleconverter_specifications(lens))


@main.command()
@click.argument("focal_length", type=float)
@click.argument("lens_ids", type=int, nargs=-1)
@click.pass_context
@report_errors
def compare(ctx: click.Context, focal_length: float, lens_ids: Tuple[int, ...]) -> None:
    """Find which lens magnifies most at FOCAL_LENGTH.

    All lenses are compared if no LENS_IDS are given.
    """
    catalog = get_catalog(ctx)
    candidates = query.by_ids(catalog, lens_ids) if lens_ids else list(catalog)
    best = views.best_magnification_at_focal_length(candidates, focal_length)
    if best is None:
        msg = f"no lens has a known magnification at {focal_length:g}mm"
        click.secho(msg, fg="yellow")
        return
    click.echo(_describe(best.lens))
    click.echo(f"  {_format_magnification(best.magnification)} at {focal_length:g}mm")


@main.command()
@click.pass_context
@report_errors
def check(ctx: click.Context) -> None:
    """Report values which could not be derived from the source data."""
    catalog = get_catalog(ctx)
    for value in catalog.unresolved:
        msg = f"lens {value.lens_id}: unknown {value.field} at {value.focal_length:g}mm"
        click.secho(msg, fg="yellow")
    if catalog.unresolved:
        ctx.exit(1)
    click.echo(f"{len(catalog)} lenses, all values resolved")
