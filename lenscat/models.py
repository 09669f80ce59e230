import re
from typing import Any, FrozenSet, List, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeFloat,
    PositiveFloat,
    field_validator,
)
from pydantic.alias_generators import to_camel

# Placeholder used by raw source data for "derive this value"
DERIVE = -1

FORMAT_FULL = "Full"
FORMAT_CROP = "Crop"

_re_teleconverter = re.compile(r"^\s*([\d\.]+)\s*[x×]?\s*$", re.IGNORECASE)


def parse_teleconverter(s: str) -> float:
    """Parse a teleconverter label such as "1.4x" or "2" into its multiplier."""
    match = _re_teleconverter.match(s)
    if not match:
        msg = f"unrecognizable teleconverter: {s!r}"
        raise ValueError(msg)
    return float(match.group(1))


class LensSpecification(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    focal_length: PositiveFloat
    aperture: Optional[PositiveFloat]
    min_focus: PositiveFloat
    magnification: Optional[NonNegativeFloat]
    teleconverter: Optional[PositiveFloat] = None

    @field_validator("aperture", "magnification", mode="before")
    @classmethod
    def derive_to_none(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v == DERIVE:
            return None
        return v

    @property
    def is_resolved(self) -> bool:
        return self.aperture is not None and self.magnification is not None


def _teleconverter_values(v: Any) -> Any:
    if v is None:
        return []
    if isinstance(v, (list, tuple)):
        return [parse_teleconverter(x) if isinstance(x, str) else x for x in v]
    return v


class LensRecord(BaseModel):
    """A lens as written in a source dataset, without manufacturer and mount."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    model: str = Field(min_length=1)
    short_name: Optional[str] = None
    weight: Optional[PositiveFloat] = None
    length: Optional[PositiveFloat] = None
    filter: Optional[PositiveFloat] = None
    crop_factor: Optional[PositiveFloat] = None
    teleconverters: List[PositiveFloat] = Field(
        default_factory=list,
        validation_alias=AliasChoices("teleconverters", "teleconverterTypes"),
    )
    data: List[LensSpecification] = Field(min_length=1)

    parse_teleconverters = field_validator("teleconverters", mode="before")(
        _teleconverter_values
    )


class SourceDataset(BaseModel):
    manufacturer: str = Field(min_length=1)
    mount: str = Field(min_length=1)
    lenses: List[LensRecord]


class Lens(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: int
    manufacturer: str
    mount: str
    model: str
    short_name: Optional[str] = None
    weight: Optional[float] = None
    length: Optional[float] = None
    filter: Optional[float] = None
    crop_factor: Optional[float] = None
    teleconverters: Tuple[PositiveFloat, ...] = ()
    data: Tuple[LensSpecification, ...]

    parse_teleconverters = field_validator("teleconverters", mode="before")(
        _teleconverter_values
    )


class FilterCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    manufacturers: FrozenSet[str] = frozenset()
    mounts: FrozenSet[str] = frozenset()
    formats: FrozenSet[str] = frozenset()
    ids: FrozenSet[int] = frozenset()
    teleconverter_compatible: Optional[bool] = None
    resolved_only: bool = False


# Fields of LensSpecification which the catalog may leave unknown
KEY_SPEC_APERTURE = "aperture"
KEY_SPEC_MAGNIFICATION = "magnification"
