"""Sheet metal workpiece and bend step records.

All lengths are in mm, angles in degrees.  A sheet's ``length`` is its flat
(original) length; its formed state is the list of bends applied by the last
job execution, stored in ``current_bends``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from .errors import ConstructionError
from .material import MaterialDetails

logger = logging.getLogger(__name__)

# Used when the material has no specific min bend radius factor
FALLBACK_RADIUS_FACTOR = 0.5


class BendDirection(Enum):
    UP = "Up"      # flange folds towards +Y in the side profile
    DOWN = "Down"


class SheetState(Enum):
    FLAT = "flat"
    FORMED = "formed"


@dataclass(frozen=True)
class BendStep:
    """One planned bend.  Immutable once it belongs to a job."""
    sequence_order: int    # 1-based
    position: float        # distance from the reference edge to the bend line
    target_angle: float    # internal angle
    radius: float          # inner radius
    direction: BendDirection = BendDirection.UP

    def describe(self) -> str:
        return (
            f"#{self.sequence_order}: pos {self.position:.2f}mm, "
            f"angle {self.target_angle:.1f}deg, radius {self.radius:.2f}mm, "
            f"{self.direction.value}"
        )


def _positive(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


@dataclass(frozen=True)
class SheetSnapshot:
    """Read-only copy of a sheet handed to profile generators and displays."""
    id: str
    length: float
    width: float
    thickness: float
    material: MaterialDetails
    bends: tuple[BendStep, ...] = ()


@dataclass
class SheetMetal:
    """The workpiece.

    Raises
    ------
    ConstructionError:
        If the id is empty, a dimension is not a positive finite number, or
        no material is given.
    """

    id: str
    length: float
    width: float
    thickness: float
    material: MaterialDetails
    current_bends: list[BendStep] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id:
            raise ConstructionError("sheet id cannot be empty")
        if not (_positive(self.length) and _positive(self.width)
                and _positive(self.thickness)):
            raise ConstructionError(
                f"sheet dimensions must be positive "
                f"(L:{self.length}, W:{self.width}, T:{self.thickness})"
            )
        if self.material is None or not self.material.name:
            raise ConstructionError("material must be specified")

    @property
    def state(self) -> SheetState:
        return SheetState.FORMED if self.current_bends else SheetState.FLAT

    @property
    def min_bend_radius(self) -> float:
        """Recommended minimum inner radius for this material and thickness."""
        if self.thickness <= 0:
            return 0.0
        factor = self.material.min_bend_radius_factor
        if factor <= 0:
            return self.thickness * FALLBACK_RADIUS_FACTOR
        return self.thickness * factor

    def reset_form(self) -> None:
        """Drop all applied bends, making the sheet flat again."""
        self.current_bends = []
        logger.info("Sheet '%s' form reset (bends cleared)", self.id)

    def snapshot(self) -> SheetSnapshot:
        return SheetSnapshot(
            id=self.id,
            length=self.length,
            width=self.width,
            thickness=self.thickness,
            material=self.material,
            bends=tuple(self.current_bends),
        )
