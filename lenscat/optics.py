"""Optical formulas over focal lengths (mm), focus distances (m) and f-numbers.

Magnifications are ratios of image size to subject size at the minimum focus
distance; 0.25 reads as 1:4. Every function here is pure.
"""
import math
from typing import List, Sequence

from .exceptions import DomainError
from .models import Lens, LensSpecification

STANDARD_F_STOPS: Sequence[float] = (
    1.0, 1.1, 1.2, 1.4, 1.6, 1.8, 2.0, 2.2, 2.5, 2.8, 3.2, 3.5, 4.0, 4.5, 5.0,
    5.6, 6.3, 7.1, 8.0, 9.0, 10, 11, 13, 14, 16, 18, 20, 22, 25, 29, 32, 36,
    40, 45, 51, 57, 64,
)  # fmt: skip

MACRO_MAGNIFICATION = 1.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round to ``ndigits`` decimals, halves going toward positive infinity."""
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale


def calculate_magnification(focal_length: float, min_focus: float) -> float:
    """Magnification at the minimum focus distance, ``f / (d - f)``."""
    min_focus_mm = min_focus * 1000
    if min_focus_mm == focal_length:
        msg = f"focus distance equals focal length: {focal_length}mm"
        raise DomainError(msg)

    magnification = focal_length / (min_focus_mm - focal_length)
    return abs(round_half_up(magnification, 2))


def calculate_min_focus_for_magnification(
    focal_length: float, target_magnification: float
) -> float:
    """Focus distance in meters needed to reach ``target_magnification``."""
    if target_magnification == 0:
        raise DomainError("magnification must not be zero")

    min_focus_mm = focal_length * (1 + 1 / target_magnification)
    return round_half_up(min_focus_mm / 1000, 2)


def calculate_magnification_across_focal_lengths(
    target_focal_length: float,
    target_focus_distance: float,
    reference_focal_length: float,
    reference_focus_distance: float,
    reference_magnification: float,
) -> float:
    """Project a known magnification onto another focal length of a zoom.

    Uses ``M1 = M2 * (f1 / f2) * ((u2 - f2) / (u1 - f1))`` where ``u`` is the
    focus distance converted to millimeters.
    """
    u1 = target_focus_distance * 1000
    u2 = reference_focus_distance * 1000
    f1 = target_focal_length
    f2 = reference_focal_length
    if f2 == 0:
        raise DomainError("reference focal length must not be zero")
    if u1 == f1:
        msg = f"focus distance equals focal length: {f1}mm"
        raise DomainError(msg)

    focal_ratio = f1 / f2
    focus_ratio = (u2 - f2) / (u1 - f1)
    magnification = reference_magnification * focal_ratio * focus_ratio
    return abs(round_half_up(magnification, 3))


def calculate_aperture_at_focal_length(
    focal_length: float,
    min_focal_length: float,
    max_focal_length: float,
    aperture_at_min: float,
    aperture_at_max: float,
) -> float:
    if min_focal_length == max_focal_length:
        msg = "cannot interpolate aperture on a single focal length"
        raise DomainError(f"{msg}: {min_focal_length}mm")

    t = (focal_length - min_focal_length) / (max_focal_length - min_focal_length)
    return aperture_at_min + (aperture_at_max - aperture_at_min) * t


def round_to_standard_f_stop(computed: float) -> float:
    closest = STANDARD_F_STOPS[0]
    min_diff = abs(computed - closest)
    for f_stop in STANDARD_F_STOPS[1:]:
        diff = abs(computed - f_stop)
        if diff < min_diff:
            closest, min_diff = f_stop, diff
    return closest


def format_magnification_ratio(magnification: float) -> str:
    if magnification <= 0:
        msg = f"magnification must be positive: {magnification}"
        raise DomainError(msg)
    if magnification >= 1:
        return f"{magnification:.1f}:1"
    return f"1:{round_half_up(1 / magnification):.0f}"


def is_macro_capable(magnification: float) -> bool:
    return magnification >= MACRO_MAGNIFICATION


def calculate_teleconverter_data(
    spec: LensSpecification, teleconverter: float
) -> LensSpecification:
    """Effective specification of ``spec`` behind a teleconverter.

    The minimum focus distance does not change since the lens focuses the same
    way with or without a converter mounted.
    """
    if teleconverter <= 0:
        msg = f"teleconverter must be positive: {teleconverter}"
        raise DomainError(msg)

    aperture = None
    if spec.aperture is not None:
        aperture = round_to_standard_f_stop(spec.aperture * teleconverter)
    magnification = None
    if spec.magnification is not None:
        magnification = spec.magnification * teleconverter

    return LensSpecification(
        focal_length=spec.focal_length * teleconverter,
        aperture=aperture,
        min_focus=spec.min_focus,
        magnification=magnification,
        teleconverter=teleconverter,
    )


def teleconverter_specifications(lens: Lens) -> List[LensSpecification]:
    return [
        calculate_teleconverter_data(spec, tc)
        for tc in lens.teleconverters
        for spec in lens.data
    ]
