"""Side-view profile geometry of a formed sheet.

Produces the polyline an external renderer draws: the flat length is
walked from the reference edge and the direction turns at every bend line
by the bend's deflection (``180 - target_angle``), counter-clockwise for
Up bends and clockwise for Down bends.  Bend radius and allowance are not
modelled; flanges meet at sharp corners on the neutral line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from shapely.geometry import LineString

from .sheet import BendDirection, SheetSnapshot


@dataclass
class Profile:
    """Polyline of the formed sheet, vertices in mm as an (N, 2) array."""

    points: np.ndarray
    bend_count: int = 0
    _line: Optional[LineString] = field(default=None, repr=False)

    @property
    def line(self) -> LineString:
        if self._line is None:
            self._line = LineString(self.points)
        return self._line

    @property
    def length(self) -> float:
        """Developed length; equals the flat sheet length."""
        return float(self.line.length)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax) of the profile."""
        return tuple(float(v) for v in self.line.bounds)

    @property
    def width(self) -> float:
        xmin, _, xmax, _ = self.bounds
        return xmax - xmin

    @property
    def height(self) -> float:
        _, ymin, _, ymax = self.bounds
        return ymax - ymin


def _deflection(angle: float, direction: BendDirection) -> float:
    turn = np.radians(180.0 - angle)
    return turn if direction is BendDirection.UP else -turn


def compute_profile(sheet: SheetSnapshot) -> Profile:
    """Build the side profile of *sheet* from its applied bends.

    Bends sharing a position are combined into one corner.
    """
    turns: dict[float, float] = {}
    for b in sorted(sheet.bends, key=lambda b: b.position):
        turns[b.position] = turns.get(b.position, 0.0) + _deflection(
            b.target_angle, b.direction
        )

    stations = np.array([0.0, *turns.keys(), sheet.length])
    seg_lengths = np.diff(stations)
    # Heading of each segment: 0 for the first flange, then cumulative turns
    headings = np.concatenate(([0.0], np.cumsum(list(turns.values()))))

    steps = np.column_stack((seg_lengths * np.cos(headings),
                             seg_lengths * np.sin(headings)))
    points = np.vstack((np.zeros((1, 2)), np.cumsum(steps, axis=0)))
    return Profile(points=points, bend_count=len(sheet.bends))
