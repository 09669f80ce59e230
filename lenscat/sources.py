"""Read source datasets from JSON files."""
import logging
import os
import pathlib
from typing import Iterable, Iterator, List, Union

import pydantic

from .exceptions import CatalogValidationError
from .models import SourceDataset

_logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def enum_source_files(paths: Iterable[PathLike]) -> Iterator[pathlib.Path]:
    """Expand directories into the JSON files they contain, sorted by name."""
    for path in map(pathlib.Path, paths):
        if path.is_dir():
            yield from sorted(p for p in path.glob("*.json") if p.is_file())
        else:
            yield path


def load_source(path: PathLike) -> SourceDataset:
    path = pathlib.Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as ex:
        msg = f"cannot read source '{path}': {str(ex)}"
        raise CatalogValidationError(msg) from ex

    try:
        dataset = SourceDataset.model_validate_json(text)
    except pydantic.ValidationError as ex:
        raise CatalogValidationError(f"malformed source '{path}': {ex}") from ex

    _logger.debug(
        "loaded %d lenses of %s %s from %s",
        len(dataset.lenses),
        dataset.manufacturer,
        dataset.mount,
        path,
    )
    return dataset


def load_sources(paths: Iterable[PathLike]) -> List[SourceDataset]:
    return [load_source(p) for p in enum_source_files(paths)]
