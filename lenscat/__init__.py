import pathlib

import click

__version__ = "26.10.18"

APP_NAME = "lenscat"

app_dir = pathlib.Path(click.get_app_dir(APP_NAME, roaming=False, force_posix=True))

config = {
    "sources_dir": app_dir / "sources",
    "sources_envvar": "LENSCAT_SOURCES",
}

from .catalog import Catalog, build_catalog  # noqa: E402
from .exceptions import (  # noqa: E402
    CatalogValidationError,
    DomainError,
    LensCatalogException,
)
from .models import FilterCriteria, Lens, LensSpecification  # noqa: E402

__all__ = [
    "Catalog",
    "CatalogValidationError",
    "DomainError",
    "FilterCriteria",
    "Lens",
    "LensCatalogException",
    "LensSpecification",
    "build_catalog",
]
