from typing import AbstractSet, Iterable, List, Tuple

from .models import FORMAT_CROP, FORMAT_FULL, FilterCriteria, Lens


def distinct_manufacturers(lenses: Iterable[Lens]) -> Tuple[str, ...]:
    return tuple(sorted({lens.manufacturer for lens in lenses}))


def distinct_mounts(lenses: Iterable[Lens]) -> Tuple[str, ...]:
    return tuple(sorted({lens.mount for lens in lenses}))


def lens_format(lens: Lens) -> str:
    return FORMAT_CROP if lens.crop_factor is not None else FORMAT_FULL


def is_resolved(lens: Lens) -> bool:
    return all(spec.is_resolved for spec in lens.data)


def _matches_any(value: str, candidates: AbstractSet[str]) -> bool:
    value = value.lower()
    return any(value == c.lower() for c in candidates)


def matches(lens: Lens, criteria: FilterCriteria) -> bool:
    """Whether a lens satisfies every constraint set in the criteria."""
    if criteria.manufacturers and not _matches_any(
        lens.manufacturer, criteria.manufacturers
    ):
        return False
    if criteria.mounts and not _matches_any(lens.mount, criteria.mounts):
        return False
    if criteria.formats and not _matches_any(lens_format(lens), criteria.formats):
        return False
    if criteria.ids and lens.id not in criteria.ids:
        return False
    if criteria.teleconverter_compatible is not None:
        if bool(lens.teleconverters) != criteria.teleconverter_compatible:
            return False
    if criteria.resolved_only and not is_resolved(lens):
        return False
    return True


def filter_lenses(lenses: Iterable[Lens], criteria: FilterCriteria) -> List[Lens]:
    return [lens for lens in lenses if matches(lens, criteria)]


def by_ids(lenses: Iterable[Lens], ids: Iterable[int]) -> List[Lens]:
    wanted = frozenset(ids)
    return [lens for lens in lenses if lens.id in wanted]
