"""Command to export lens data."""
from enum import Enum
from typing import Any, Optional

import click

from .. import export as exporters
from .. import query
from ..models import FilterCriteria
from . import filter_options, get_catalog, main, report_errors

_help_output = "The file to write. Standard output is used if omitted."


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


@main.command()
@click.argument(
    "target", type=click.Choice([f.value for f in ExportFormat], case_sensitive=False)
)
@filter_options
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help=_help_output,
)
@click.pass_context
@report_errors
def export(
    ctx: click.Context, target: str, output: Optional[str], **filters: Any
) -> None:
    """Export lenses matching all given filters.

    TARGET must be either 'csv' or 'json'.
    """
    catalog = get_catalog(ctx)
    lenses = query.filter_lenses(catalog, FilterCriteria(**filters))

    if ExportFormat(target.lower()) == ExportFormat.CSV:
        text = exporters.to_csv(lenses)
    else:
        text = exporters.to_json(lenses) + "\n"
    assert text is not None

    if output is None:
        click.echo(text, nl=False)
    else:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(text)
