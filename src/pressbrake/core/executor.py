"""Background execution of jobs.

A :class:`JobExecutor` runs ``PressBrake.process_job`` (and an optional
export step) on a single worker thread and hands the outcome back through a
``concurrent.futures.Future``.  The job is deep-copied on the caller's
thread before it is queued, so the worker owns its own sheet and the
caller's objects are never touched from the background.
"""

from __future__ import annotations

import copy
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import NilJobOrSheetError
from .job import Job
from .press_brake import PressBrake
from .sheet import SheetMetal, SheetSnapshot

logger = logging.getLogger(__name__)

Exporter = Callable[[SheetSnapshot], Any]


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one successful job execution."""

    job_name: str
    sheet: SheetMetal
    parts_bent: int            # machine session counter after this run
    artifact: Any = None       # whatever the exporter returned


class JobExecutor:
    """Serialises job executions against one press brake.

    Parameters
    ----------
    press_brake:
        Machine that executes the jobs.
    exporter:
        Optional callable given the formed sheet snapshot after each
        successful run (e.g. a profile generator).  Its return value is
        stored as ``ExecutionResult.artifact``; an exception from it fails
        the future.
    """

    def __init__(self, press_brake: PressBrake, exporter: Optional[Exporter] = None):
        self._press_brake = press_brake
        self._exporter = exporter
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="press-brake")

    def submit(self, job: Optional[Job]) -> "Future[ExecutionResult]":
        """Queue *job* for execution and return a future for its result."""
        if job is None:
            future: Future[ExecutionResult] = Future()
            future.set_exception(NilJobOrSheetError())
            return future
        work = copy.deepcopy(job)
        logger.debug("Queued job '%s' for execution", job.name)
        return self._pool.submit(self._execute, work)

    def run(self, job: Optional[Job]) -> ExecutionResult:
        """Execute *job* and wait for the result (re-raises failures)."""
        return self.submit(job).result()

    def _execute(self, job: Job) -> ExecutionResult:
        sheet = self._press_brake.process_job(job)
        parts = self._press_brake.total_parts_bent_session
        artifact = None
        if self._exporter is not None:
            artifact = self._exporter(sheet.snapshot())
        return ExecutionResult(job.name, sheet, parts, artifact)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> JobExecutor:
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
