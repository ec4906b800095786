"""Job: the ordered bend plan for one sheet.

Steps are appended by :class:`~pressbrake.core.controller.JobController`
only; everything else should treat ``steps`` as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .errors import ConstructionError
from .sheet import BendStep, SheetMetal


@dataclass
class Job:
    """A named bend plan bound to a single sheet."""

    name: str
    sheet: Optional[SheetMetal]
    steps: list[BendStep] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise ConstructionError("job name cannot be empty")
        if self.sheet is None:
            raise ConstructionError("job must have a sheet defined")

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def step_snapshot(self) -> tuple[BendStep, ...]:
        return tuple(self.steps)
