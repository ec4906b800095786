"""Press brake machine: replays a job's bend plan onto its sheet."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Optional

from .errors import NilJobOrSheetError, ToolingNotSetError
from .job import Job
from .sheet import SheetMetal
from .tooling import Die, Punch, ToolingCatalog

logger = logging.getLogger(__name__)


class PressBrake:
    """The (simulated) CNC press brake.

    Holds the currently selected punch and die and a count of parts bent
    since the machine object was created.  ``process_job`` calls are
    serialised by an internal lock, so the counter is never double-counted.
    """

    def __init__(
        self,
        name: str,
        tooling: ToolingCatalog,
        punch: Optional[Punch] = None,
        die: Optional[Die] = None,
    ):
        self.name = name
        self._tooling = tooling
        self._punch = punch
        self._die = die
        self._total_parts_bent_session = 0
        self._lock = threading.Lock()

    @property
    def current_punch(self) -> Optional[Punch]:
        return self._punch

    @property
    def current_die(self) -> Optional[Die]:
        return self._die

    @property
    def total_parts_bent_session(self) -> int:
        return self._total_parts_bent_session

    def set_punch(self, punch: Punch) -> None:
        if punch is None:
            raise ValueError("punch must not be None")
        with self._lock:
            self._punch = punch
        logger.info("PressBrake '%s' punch set to: '%s'", self.name, punch.name)

    def set_die(self, die: Die) -> None:
        if die is None:
            raise ValueError("die must not be None")
        with self._lock:
            self._die = die
        logger.info("PressBrake '%s' die set to: '%s'", self.name, die.name)

    def select_punch(self, name: str) -> Punch:
        punch = self._tooling.get_punch(name)
        self.set_punch(punch)
        return punch

    def select_die(self, name: str) -> Die:
        die = self._tooling.get_die(name)
        self.set_die(die)
        return die

    def tooling_status(self) -> str:
        punch = self._punch.name if self._punch else "None"
        die = self._die.name if self._die else "None"
        return f"Punch: {punch}, Die: {die}"

    def process_job(self, job: Optional[Job]) -> SheetMetal:
        """Replay *job*'s steps onto its sheet, in stored order.

        The sheet is flattened first, then each step is appended to
        ``current_bends``.  Steps were validated when they were added, so
        none is rejected here.

        Raises
        ------
        NilJobOrSheetError:
            If *job* or its sheet is missing.
        ToolingNotSetError:
            If no punch or no die is selected.
        """
        if job is None or job.sheet is None:
            raise NilJobOrSheetError()

        with self._lock:
            if self._punch is None or self._die is None:
                raise ToolingNotSetError()
            sheet = job.sheet
            logger.info(
                "PressBrake '%s' processing job '%s' (%d steps). Punch: '%s', Die: '%s'",
                self.name, job.name, len(job.steps), self._punch.name, self._die.name,
            )
            sheet.reset_form()
            total = len(job.steps)
            for i, step in enumerate(job.steps, start=1):
                logger.debug("  Step %d/%d: %s", i, total, step.describe())
                sheet.current_bends.append(replace(step))

            self._total_parts_bent_session += 1
            logger.info(
                "Job '%s' processed. Total parts bent this session: %d",
                job.name, self._total_parts_bent_session,
            )
        return sheet
