"""Write lenses as CSV or JSON documents."""
import math
import pathlib
from datetime import datetime, timezone
from typing import IO, Any, Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models import Lens

KEY_MANUFACTURER = "Manufacturer"
KEY_MOUNT = "Mount"
KEY_MODEL = "Model"
KEY_FOCAL_LENGTH = "Focal Length (mm)"
KEY_APERTURE = "Max Aperture"
KEY_MIN_FOCUS = "Min Focus Distance (m)"
KEY_MAGNIFICATION = "Max Magnification"
KEY_TELECONVERTERS = "Teleconverters"

CSV_COLUMNS = [
    KEY_MANUFACTURER,
    KEY_MOUNT,
    KEY_MODEL,
    KEY_FOCAL_LENGTH,
    KEY_APERTURE,
    KEY_MIN_FOCUS,
    KEY_MAGNIFICATION,
    KEY_TELECONVERTERS,
]

CsvTarget = Union[str, pathlib.Path, IO[str]]


class CatalogExport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    export_date: datetime
    total_lenses: int
    lenses: List[Lens]


def format_number(value: float) -> str:
    """Shortest text reading back as the same float; whole numbers have no '.0'."""
    if math.isnan(value):
        return ""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def format_teleconverters(teleconverters: Sequence[float]) -> str:
    if not teleconverters:
        return "None"
    return ";".join(f"{tc:g}x" for tc in teleconverters)


def to_dataframe(lenses: Iterable[Lens]) -> pd.DataFrame:
    """One row per specification entry of each lens."""
    rows: List[Dict[str, Any]] = []
    for lens in lenses:
        teleconverters = format_teleconverters(lens.teleconverters)
        for spec in lens.data:
            rows.append(
                {
                    KEY_MANUFACTURER: lens.manufacturer,
                    KEY_MOUNT: lens.mount,
                    KEY_MODEL: lens.model,
                    KEY_FOCAL_LENGTH: spec.focal_length,
                    KEY_APERTURE: spec.aperture,
                    KEY_MIN_FOCUS: spec.min_focus,
                    KEY_MAGNIFICATION: spec.magnification,
                    KEY_TELECONVERTERS: teleconverters,
                }
            )
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def to_csv(
    lenses: Iterable[Lens], path_or_buf: Optional[CsvTarget] = None
) -> Optional[str]:
    """Write lenses as CSV; returns the text when no destination is given.

    Unknown apertures and magnifications are left as empty cells.
    """
    df = to_dataframe(lenses)
    return df.to_csv(
        path_or_buf,
        index=False,
        float_format=format_number,
        na_rep="",
        lineterminator="\n",
    )


def to_json(
    lenses: Iterable[Lens],
    export_date: Optional[datetime] = None,
    *,
    indent: Optional[int] = 2,
) -> str:
    lenses = list(lenses)
    export = CatalogExport(
        export_date=export_date or datetime.now(timezone.utc),
        total_lenses=len(lenses),
        lenses=lenses,
    )
    return export.model_dump_json(by_alias=True, indent=indent)
