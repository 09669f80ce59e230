"""Merge source datasets into a normalized, immutable lens catalog."""
import logging
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
    overload,
)

import pydantic

from .exceptions import CatalogValidationError, DomainError
from .models import (
    KEY_SPEC_APERTURE,
    KEY_SPEC_MAGNIFICATION,
    Lens,
    LensSpecification,
    SourceDataset,
)
from .optics import (
    calculate_aperture_at_focal_length,
    calculate_magnification_across_focal_lengths,
)

_logger = logging.getLogger(__name__)

SourceLike = Union[SourceDataset, Mapping[str, Any]]


class UnresolvedValue(NamedTuple):
    lens_id: int
    focal_length: float
    field: str


class Catalog(Sequence[Lens]):
    """Read-only sequence of normalized lenses in focal range order.

    A catalog never changes once built. Rebuilding from other sources makes a
    new instance.
    """

    def __init__(self, lenses: Iterable[Lens] = ()) -> None:
        self._lenses: Tuple[Lens, ...] = tuple(lenses)
        self._unresolved: Tuple[UnresolvedValue, ...] = tuple(
            v for lens in self._lenses for v in find_unresolved(lens)
        )

    @overload
    def __getitem__(self, index: int) -> Lens:
        ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Lens, ...]:
        ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Lens, Tuple[Lens, ...]]:
        return self._lenses[index]

    def __len__(self) -> int:
        return len(self._lenses)

    def __iter__(self) -> Iterator[Lens]:
        return iter(self._lenses)

    def __repr__(self) -> str:
        return f"<Catalog lenses={len(self._lenses)}>"

    @property
    def lenses(self) -> Tuple[Lens, ...]:
        return self._lenses

    @property
    def unresolved(self) -> Tuple[UnresolvedValue, ...]:
        """Values left unknown because no anchor data existed to derive them."""
        return self._unresolved


def build_catalog(sources: Iterable[SourceLike]) -> Catalog:
    datasets = [_validate_source(idx, source) for idx, source in enumerate(sources)]

    # Tag every lens with where it came from and check the IDs are unique
    lenses: List[Lens] = []
    origins: Dict[int, str] = {}
    for dataset in datasets:
        origin = f"{dataset.manufacturer} {dataset.mount}"
        for record in dataset.lenses:
            if record.id in origins:
                msg = f"duplicate lens id {record.id}: {record.model!r} ({origin})"
                msg += f" collides with a lens of {origins[record.id]}"
                raise CatalogValidationError(msg)
            origins[record.id] = origin
            lenses.append(
                Lens(
                    manufacturer=dataset.manufacturer,
                    mount=dataset.mount,
                    **dict(record),
                )
            )

    normalized = sorted((normalize_lens(lens) for lens in lenses), key=focal_range)
    catalog = Catalog(normalized)
    for value in catalog.unresolved:
        _logger.warning(
            "lens %d has no %s at %gmm",
            value.lens_id,
            value.field,
            value.focal_length,
        )
    _logger.debug("built a catalog of %d lenses", len(catalog))
    return catalog


def _validate_source(idx: int, source: SourceLike) -> SourceDataset:
    if isinstance(source, SourceDataset):
        return source

    try:
        return SourceDataset.model_validate(source)
    except pydantic.ValidationError as ex:
        msg = f"malformed source #{idx}"
        if isinstance(source, Mapping) and "manufacturer" in source:
            msg += f" ({source['manufacturer']} {source.get('mount', '?')})"
        raise CatalogValidationError(f"{msg}: {ex}") from ex


def focal_range(lens: Lens) -> Tuple[float, float]:
    focal_lengths = [spec.focal_length for spec in lens.data]
    return min(focal_lengths), max(focal_lengths)


def normalize_lens(lens: Lens) -> Lens:
    """Fill unknown magnifications and apertures of a lens where possible."""
    data = _resolve_magnifications(lens.id, lens.data)
    data = _resolve_apertures(lens.id, data)
    return lens.model_copy(update={"data": tuple(data)})


def find_reference_point(
    data: Iterable[LensSpecification],
) -> Optional[LensSpecification]:
    """The first entry having the greatest positive magnification."""
    reference: Optional[LensSpecification] = None
    best = 0.0
    for spec in data:
        if spec.magnification is not None and best < spec.magnification:
            reference, best = spec, spec.magnification
    return reference


def _resolve_magnifications(
    lens_id: int, data: Sequence[LensSpecification]
) -> List[LensSpecification]:
    reference = find_reference_point(data)
    if reference is None or reference.magnification is None:
        return list(data)

    resolved = []
    for spec in data:
        if spec.magnification is None:
            try:
                magnification = calculate_magnification_across_focal_lengths(
                    spec.focal_length,
                    spec.min_focus,
                    reference.focal_length,
                    reference.min_focus,
                    reference.magnification,
                )
            except DomainError as ex:
                _logger.warning("lens %d: %s", lens_id, ex)
            else:
                _logger.debug(
                    "lens %d: magnification at %gmm derived as %g",
                    lens_id,
                    spec.focal_length,
                    magnification,
                )
                spec = spec.model_copy(update={KEY_SPEC_MAGNIFICATION: magnification})
        resolved.append(spec)
    return resolved


def _resolve_apertures(
    lens_id: int, data: Sequence[LensSpecification]
) -> List[LensSpecification]:
    known = [spec for spec in data if spec.aperture is not None]
    if len(known) < 2:
        return list(data)

    lo = min(known, key=lambda spec: spec.focal_length)
    hi = max(known, key=lambda spec: spec.focal_length)
    if lo.focal_length == hi.focal_length:
        return list(data)
    assert lo.aperture is not None and hi.aperture is not None

    resolved = []
    for spec in data:
        if spec.aperture is None:
            aperture = calculate_aperture_at_focal_length(
                spec.focal_length,
                lo.focal_length,
                hi.focal_length,
                lo.aperture,
                hi.aperture,
            )
            if aperture <= 0:
                # Extrapolated past the known range into an impossible f-number
                _logger.warning(
                    "lens %d: aperture at %gmm extrapolates to %g",
                    lens_id,
                    spec.focal_length,
                    aperture,
                )
            else:
                _logger.debug(
                    "lens %d: aperture at %gmm derived as %g",
                    lens_id,
                    spec.focal_length,
                    aperture,
                )
                spec = spec.model_copy(update={KEY_SPEC_APERTURE: aperture})
        resolved.append(spec)
    return resolved


def find_unresolved(lens: Lens) -> Iterator[UnresolvedValue]:
    for spec in lens.data:
        if spec.magnification is None:
            yield UnresolvedValue(lens.id, spec.focal_length, KEY_SPEC_MAGNIFICATION)
        if spec.aperture is None:
            yield UnresolvedValue(lens.id, spec.focal_length, KEY_SPEC_APERTURE)
