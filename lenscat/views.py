"""Per-lens aggregates shown next to a lens or a selection of lenses."""
from typing import Iterable, List, NamedTuple, Optional

from .exceptions import DomainError
from .models import Lens


class MaxMagnification(NamedTuple):
    magnification: float
    focal_length: float


class BestMagnification(NamedTuple):
    lens: Lens
    magnification: float


def _require_data(lens: Lens) -> None:
    if not lens.data:
        msg = f"lens {lens.id} ({lens.model}) has no specification data"
        raise DomainError(msg)


def get_max_magnification_with_focal_length(lens: Lens) -> MaxMagnification:
    """The greatest known magnification and the first focal length reaching it.

    Unknown magnifications are skipped rather than taken as zero.
    """
    _require_data(lens)
    best: Optional[MaxMagnification] = None
    for spec in lens.data:
        if spec.magnification is None:
            continue
        if best is None or best.magnification < spec.magnification:
            best = MaxMagnification(spec.magnification, spec.focal_length)
    if best is None:
        msg = f"lens {lens.id} ({lens.model}) has no known magnification"
        raise DomainError(msg)
    return best


def get_max_magnification(lens: Lens) -> float:
    return get_max_magnification_with_focal_length(lens).magnification


def get_min_focal_length(lens: Lens) -> float:
    _require_data(lens)
    return min(spec.focal_length for spec in lens.data)


def get_max_focal_length(lens: Lens) -> float:
    _require_data(lens)
    return max(spec.focal_length for spec in lens.data)


def best_magnification_at_focal_length(
    lenses: Iterable[Lens], focal_length: float
) -> Optional[BestMagnification]:
    """The lens reaching the greatest magnification at exactly ``focal_length``.

    Lenses without an entry at that focal length are left out. The first lens
    wins a tie.
    """
    best: Optional[BestMagnification] = None
    for lens in lenses:
        for spec in lens.data:
            if spec.focal_length != focal_length or spec.magnification is None:
                continue
            if best is None or best.magnification < spec.magnification:
                best = BestMagnification(lens, spec.magnification)
    return best


def sort_by_max_focal_length(lenses: Iterable[Lens]) -> List[Lens]:
    return sorted(lenses, key=get_max_focal_length)
