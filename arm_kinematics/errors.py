"""Error taxonomy for the kinematics engine.

Every error carries a stable ``code`` that the request/response layer uses
as the failure identifier. Solver-derived errors also carry the final
``IKResult`` so a caller can inspect the residual and iteration count.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arm_kinematics.dataclass.ik_types import IKResult


class KinematicsError(Exception):
    """Base class for all kinematics errors."""

    code = "KINEMATICS_ERROR"

    def __init__(self, message: str, result: IKResult | None = None):
        super().__init__(message)
        self.message = message
        self.result = result


class InvalidConfigurationError(KinematicsError, ValueError):
    """DOF outside the supported range or mismatched joint data."""

    code = "INVALID_DOF"


class InvalidPoseError(KinematicsError, ValueError):
    """Malformed or non-finite pose components."""

    code = "INVALID_POSE"


class UnreachableTargetError(KinematicsError):
    """Target rejected by the workspace policy or solver diverged."""

    code = "UNREACHABLE_TARGET"


class ConvergenceFailureError(KinematicsError):
    """Iteration budget ran out before the tolerances were met."""

    code = "CONVERGENCE_FAILURE"
