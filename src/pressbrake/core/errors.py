"""Exception hierarchy for the bending engine.

Every mutating operation raises one of these to its immediate caller.
None of them is fatal: state is left untouched when they are raised.
"""

from __future__ import annotations


class PressBrakeError(Exception):
    """Base class for all engine errors."""


class ValidationError(PressBrakeError):
    """A bend or sheet parameter failed to parse or is out of range."""


class ConstructionError(PressBrakeError):
    """A sheet, job, material or tool could not be built from its inputs."""


class UnknownEntryError(PressBrakeError, KeyError):
    """A catalog lookup by name found nothing."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""


class PreconditionError(PressBrakeError):
    """The operation was refused because required state is missing."""


class NoCurrentJobError(PreconditionError):
    def __init__(self, message: str = "no current job selected"):
        super().__init__(message)


class NoSheetError(PreconditionError):
    def __init__(self, message: str = "current job has no sheet defined"):
        super().__init__(message)


class ToolingNotSetError(PreconditionError):
    def __init__(self, message: str = "tooling not set"):
        super().__init__(message)


class NilJobOrSheetError(PreconditionError):
    def __init__(self, message: str = "job or sheet is missing"):
        super().__init__(message)


class StaleProposalError(PreconditionError):
    """A proposal was already closed or no longer matches the current job."""
