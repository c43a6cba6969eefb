"""
Status reporting for the numerical primitives.

The numerical core never aborts a computation because of numerical trouble.
Instead each primitive returns a `Result` carrying the computed value together
with a `Status` describing what happened, so callers (and tests) can tell a
non-convergent Newton iteration from a singular Hessian or a trajectory that
ran into one of the massive bodies. `Result.unwrap()` turns a non-OK status
into the matching exception for callers that prefer to fail loudly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Status(Enum):
    """Outcome of a numerical computation."""

    OK = "ok"
    DID_NOT_CONVERGE = "did_not_converge"
    SINGULAR_JACOBIAN = "singular_jacobian"
    SINGULARITY_ENCOUNTERED = "singularity_encountered"
    ENERGY_UNREACHABLE = "energy_unreachable"


class CRTBPError(RuntimeError):
    """Base class for numerical failures of the CR3BP core."""

    status = None


class DidNotConvergeError(CRTBPError):
    """Newton-Raphson exhausted its iterations without meeting the tolerance."""

    status = Status.DID_NOT_CONVERGE


class SingularJacobianError(CRTBPError):
    """The linear solve of a Newton step failed or was ill-conditioned."""

    status = Status.SINGULAR_JACOBIAN


class SingularityEncounteredError(CRTBPError):
    """A position came within the exclusion radius of a massive body."""

    status = Status.SINGULARITY_ENCOUNTERED


class EnergyUnreachableError(CRTBPError):
    """The requested Jacobi constant cannot be reached at a position."""

    status = Status.ENERGY_UNREACHABLE


_ERRORS = {
    Status.DID_NOT_CONVERGE: DidNotConvergeError,
    Status.SINGULAR_JACOBIAN: SingularJacobianError,
    Status.SINGULARITY_ENCOUNTERED: SingularityEncounteredError,
    Status.ENERGY_UNREACHABLE: EnergyUnreachableError,
}


def error_for(status):
    """Exception class associated with a non-OK status."""
    if status is Status.OK:
        raise ValueError("Status.OK has no associated error.")
    return _ERRORS[status]


@dataclass(frozen=True, eq=False)
class Result:
    """
    Value produced by a numerical primitive together with its status.

    Attributes
    ----------
    value : Any
        The computed value. Always present, even when the status is not OK.
    status : Status
        Outcome of the computation
    message : str
        Human readable detail for non-OK statuses
    """

    value: Any
    status: Status = Status.OK
    message: str = ""

    @property
    def ok(self):
        return self.status is Status.OK

    def unwrap(self):
        """
        Return the value, raising the matching `CRTBPError` if the status is not OK.
        """
        if not self.ok:
            raise error_for(self.status)(self.message or self.status.value)
        return self.value
