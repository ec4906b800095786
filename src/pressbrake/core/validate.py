"""Bend and sheet parameter validation.

Checks a proposed bend against the configured numeric limits and the
sheet's recommended minimum radius before it is allowed into a job.
Everything here is side-effect free; the job controller decides what to
do with the verdict.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import ConstructionError, ValidationError
from .sheet import BendDirection, SheetMetal

Number = Union[float, int, str]


@dataclass(frozen=True)
class BendLimits:
    """Accepted ranges for bend radius (mm) and angle (degrees)."""

    min_radius: float = 0.0      # 0 is a sharp bend
    max_radius: float = 500.0
    min_angle: float = 1.0       # 0 would be no bend at all
    max_angle: float = 179.0     # 180 would be flat


@dataclass(frozen=True)
class SheetLimits:
    """Accepted range for every sheet dimension (mm)."""

    min_dimension: float = 0.1
    max_dimension: float = 10000.0


class BendOutcome(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NEEDS_CONFIRMATION = "needs_confirmation"


@dataclass(frozen=True)
class BendCheck:
    """Verdict on one proposed bend."""

    outcome: BendOutcome
    reason: str = ""
    min_recommended_radius: Optional[float] = None

    @property
    def is_rejected(self) -> bool:
        return self.outcome is BendOutcome.REJECTED

    @property
    def needs_confirmation(self) -> bool:
        return self.outcome is BendOutcome.NEEDS_CONFIRMATION


def min_bend_radius(sheet: SheetMetal) -> float:
    """Recommended minimum inner radius for *sheet*.

    ``thickness * factor`` for materials with a factor, otherwise half the
    thickness.
    """
    return sheet.min_bend_radius


def validate_bend(
    sheet: SheetMetal,
    position: float,
    angle: float,
    radius: float,
    limits: BendLimits = BendLimits(),
) -> BendCheck:
    """Check a proposed bend on *sheet*.

    Checks performed, in order:
    - position strictly inside the sheet length (edges excluded)
    - radius within ``[min_radius, max_radius]``
    - angle within ``[min_angle, max_angle]``

    A radius that passes but is below the sheet's recommended minimum gives
    ``NEEDS_CONFIRMATION`` rather than a rejection.
    """
    # Comparisons are written as "not inside" so NaN is rejected too
    if not (0 < position < sheet.length):
        return BendCheck(
            BendOutcome.REJECTED,
            f"bend position ({position:.2f}mm) is outside sheet length "
            f"(0-{sheet.length:.2f}mm)",
        )
    if not (limits.min_radius <= radius <= limits.max_radius):
        return BendCheck(
            BendOutcome.REJECTED,
            f"bend radius ({radius:.2f}mm) is outside allowed range "
            f"({limits.min_radius:.2f}-{limits.max_radius:.2f}mm)",
        )
    if not (limits.min_angle <= angle <= limits.max_angle):
        return BendCheck(
            BendOutcome.REJECTED,
            f"bend angle ({angle:.2f}deg) is outside allowed range "
            f"({limits.min_angle:.1f}-{limits.max_angle:.1f}deg)",
        )

    recommended = min_bend_radius(sheet)
    if 0 < radius < recommended:
        return BendCheck(
            BendOutcome.NEEDS_CONFIRMATION,
            f"radius ({radius:.2f}mm) < recommended min ({recommended:.2f}mm), "
            f"may cause cracking",
            min_recommended_radius=recommended,
        )
    return BendCheck(BendOutcome.ACCEPTED, min_recommended_radius=recommended)


def validate_sheet_dimensions(
    length: float,
    width: float,
    thickness: float,
    limits: SheetLimits = SheetLimits(),
) -> None:
    """Raise ConstructionError unless every dimension is within *limits*."""
    for label, value in (("length", length), ("width", width),
                         ("thickness", thickness)):
        if not (limits.min_dimension <= value <= limits.max_dimension):
            raise ConstructionError(
                f"sheet {label} {value} out of range "
                f"({limits.min_dimension:.1f}-{limits.max_dimension:.1f}mm)"
            )


def parse_number(value: Number, field: str) -> float:
    """Convert user input (number or numeric string) to a finite float."""
    if isinstance(value, bool):
        raise ValidationError(f"invalid {field}: expected a number, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError(f"invalid {field}: value is empty")
        try:
            result = float(text)
        except ValueError:
            raise ValidationError(
                f"invalid {field}: {value!r} is not a number"
            ) from None
    elif isinstance(value, (int, float)):
        result = float(value)
    else:
        raise ValidationError(f"invalid {field}: expected a number, got {value!r}")

    if not math.isfinite(result):
        raise ValidationError(f"invalid {field}: {value!r} is not finite")
    return result


def parse_direction(token: Union[str, BendDirection]) -> BendDirection:
    """``"Up"``/``"Down"`` (any case) or a BendDirection."""
    if isinstance(token, BendDirection):
        return token
    if isinstance(token, str):
        for d in BendDirection:
            if d.value.lower() == token.strip().lower():
                return d
    raise ValidationError(
        f"invalid bend direction {token!r} (expected 'Up' or 'Down')"
    )
