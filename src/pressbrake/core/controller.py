"""Job controller: the only writer of the current job's bend plan.

Adding a bend is a two-phase operation.  :meth:`JobController.propose`
validates the parameters and returns a :class:`Proposal`; the caller then
either commits or discards it.  A proposal whose radius is below the
material's recommended minimum must be committed explicitly; this is the
"radius too small, add anyway?" confirmation, without the engine holding
callbacks.

:meth:`JobController.add_step` wraps both phases for callers that do not
need the split.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import (
    NoCurrentJobError,
    NoSheetError,
    StaleProposalError,
    ValidationError,
)
from .job import Job
from .material import MaterialCatalog
from .sheet import BendDirection, BendStep, SheetMetal
from .validate import (
    BendCheck,
    BendLimits,
    BendOutcome,
    Number,
    SheetLimits,
    parse_direction,
    parse_number,
    validate_bend,
    validate_sheet_dimensions,
)

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Proposal:
    """A validated, not yet applied bend request."""

    job: Job
    sheet: SheetMetal
    position: float
    angle: float
    radius: float
    direction: BendDirection
    check: BendCheck
    closed: bool = False

    @property
    def outcome(self) -> BendOutcome:
        return self.check.outcome


class RadiusWarning(Exception):
    """Raised by ``add_step`` when a bend needs explicit confirmation.

    Not an error: the bend is valid but its radius is below the recommended
    minimum.  Commit ``proposal`` to add it anyway, or discard it.
    """

    def __init__(self, proposal: Proposal):
        super().__init__(proposal.check.reason)
        self.proposal = proposal

    @property
    def min_recommended_radius(self) -> Optional[float]:
        return self.proposal.check.min_recommended_radius


class JobController:
    """Owns the current job and enforces validation before mutating it."""

    def __init__(
        self,
        materials: MaterialCatalog,
        limits: BendLimits = BendLimits(),
        sheet_limits: SheetLimits = SheetLimits(),
    ):
        self._materials = materials
        self._limits = limits
        self._sheet_limits = sheet_limits
        self._current_job: Optional[Job] = None

    # ------------------------------------------------------------------
    # Current job
    # ------------------------------------------------------------------

    @property
    def current_job(self) -> Optional[Job]:
        return self._current_job

    def get_current_job(self) -> Optional[Job]:
        return self._current_job

    def set_current_job(self, job: Optional[Job]) -> None:
        self._current_job = job

    def _build_sheet(
        self,
        sheet_id: str,
        length: Number,
        width: Number,
        thickness: Number,
        material_name: str,
    ) -> SheetMetal:
        length_v = parse_number(length, "sheet length")
        width_v = parse_number(width, "sheet width")
        thickness_v = parse_number(thickness, "sheet thickness")
        validate_sheet_dimensions(length_v, width_v, thickness_v, self._sheet_limits)
        material = self._materials.get(material_name)
        return SheetMetal(sheet_id, length_v, width_v, thickness_v, material)

    def new_job(
        self,
        name: str,
        sheet_id: str,
        length: Number,
        width: Number,
        thickness: Number,
        material_name: str,
    ) -> Job:
        """Build a sheet and a job around it and make the job current.

        The previous current job is kept if anything fails.
        """
        sheet = self._build_sheet(sheet_id, length, width, thickness, material_name)
        job = Job(name=name, sheet=sheet)
        self._current_job = job
        logger.info(
            "Created job '%s' on sheet '%s' (L:%.1f W:%.1f T:%.1f, %s)",
            job.name, sheet.id, sheet.length, sheet.width, sheet.thickness,
            sheet.material.name,
        )
        return job

    def _require_job(self) -> Job:
        if self._current_job is None:
            raise NoCurrentJobError()
        return self._current_job

    def _require_sheet(self, job: Job) -> SheetMetal:
        if job.sheet is None:
            raise NoSheetError()
        return job.sheet

    # ------------------------------------------------------------------
    # Bend steps
    # ------------------------------------------------------------------

    def propose(
        self,
        position: Number,
        angle: Number,
        radius: Number,
        direction: Union[str, BendDirection] = BendDirection.UP,
    ) -> Proposal:
        """Validate a bend against the current job's sheet without applying it."""
        job = self._require_job()
        sheet = self._require_sheet(job)

        pos = parse_number(position, "bend position")
        ang = parse_number(angle, "bend angle")
        rad = parse_number(radius, "bend radius")
        dirn = parse_direction(direction)

        check = validate_bend(sheet, pos, ang, rad, self._limits)
        return Proposal(job, sheet, pos, ang, rad, dirn, check)

    def commit(self, proposal: Proposal) -> BendStep:
        """Append the proposed bend to its job.

        Raises
        ------
        ValidationError:
            If the proposal was rejected by validation.
        StaleProposalError:
            If the proposal is already closed, or its job or sheet is no
            longer the current one.
        """
        if proposal.closed:
            raise StaleProposalError("proposal was already committed or discarded")
        if proposal.check.is_rejected:
            raise ValidationError(proposal.check.reason)
        job = self._require_job()
        if proposal.job is not job or job.sheet is not proposal.sheet:
            raise StaleProposalError("proposal does not match the current job or sheet")

        step = BendStep(
            sequence_order=len(job.steps) + 1,
            position=proposal.position,
            target_angle=proposal.angle,
            radius=proposal.radius,
            direction=proposal.direction,
        )
        job.steps.append(step)
        proposal.closed = True
        logger.info(
            "Added bend step %d to job '%s': Pos:%.1f, Ang:%.1f, Rad:%.1f, Dir:%s",
            step.sequence_order, job.name, step.position, step.target_angle,
            step.radius, step.direction.value,
        )
        return step

    def discard(self, proposal: Proposal) -> None:
        if not proposal.closed:
            proposal.closed = True
            logger.info("Bend proposal at %.1fmm discarded", proposal.position)

    def add_step(
        self,
        position: Number,
        angle: Number,
        radius: Number,
        direction: Union[str, BendDirection] = BendDirection.UP,
        accept_warning: bool = False,
    ) -> BendStep:
        """Validate and append a bend in one call.

        Raises
        ------
        ValidationError:
            If a parameter does not parse or is out of range.  Nothing is
            appended.
        RadiusWarning:
            If the radius is below the recommended minimum and
            *accept_warning* is false.  Nothing is appended until the
            carried proposal is committed.
        """
        proposal = self.propose(position, angle, radius, direction)
        if proposal.check.is_rejected:
            proposal.closed = True
            raise ValidationError(proposal.check.reason)
        if proposal.check.needs_confirmation and not accept_warning:
            raise RadiusWarning(proposal)
        return self.commit(proposal)

    def clear_steps(self) -> None:
        """Remove every step and flatten the sheet.  Safe on an empty job."""
        job = self._require_job()
        job.steps = []
        if job.sheet is not None:
            job.sheet.reset_form()
        logger.info("Cleared all bend steps from job '%s'", job.name)

    # ------------------------------------------------------------------
    # Sheet properties
    # ------------------------------------------------------------------

    def update_sheet(
        self,
        length: Number,
        width: Number,
        thickness: Number,
        material_name: str,
    ) -> SheetMetal:
        """Replace the current job's sheet with one built from new properties.

        The new sheet keeps the old id and starts flat.  The bend plan is
        kept; use :meth:`clear_steps` to drop it.  On failure the old sheet
        is untouched.
        """
        job = self._require_job()
        old = self._require_sheet(job)
        sheet = self._build_sheet(old.id, length, width, thickness, material_name)

        job.sheet = sheet
        sheet.reset_form()
        logger.info(
            "Sheet properties updated for job '%s' (L:%.1f W:%.1f T:%.1f, %s)",
            job.name, sheet.length, sheet.width, sheet.thickness,
            sheet.material.name,
        )
        return sheet
