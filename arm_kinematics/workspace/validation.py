import logging
from typing import Mapping

import numpy as np

from arm_kinematics.config.robot_config import WORKSPACE_RANGES
from arm_kinematics.errors import (
    InvalidConfigurationError,
    InvalidPoseError,
    UnreachableTargetError,
)
from arm_kinematics.types import MAX_DOF, MIN_DOF, WorkspaceBounds

logger = logging.getLogger("WorkspaceValidator")

WORKSPACE_POLICIES = ("clamp", "reject")


def validate_dof(dof: int) -> int:
    """
    Check that ``dof`` is an integer in the supported range.

    Raises InvalidConfigurationError otherwise.
    """
    if isinstance(dof, bool) or not isinstance(dof, (int, np.integer)):
        raise InvalidConfigurationError(f"DOF must be an integer, got {dof!r}")
    if not MIN_DOF <= dof <= MAX_DOF:
        raise InvalidConfigurationError(
            f"DOF must be in [{MIN_DOF}, {MAX_DOF}], got {dof}"
        )
    return int(dof)


def clamp_to_workspace(
    dof: int,
    position: np.ndarray | list[float],
    ranges: Mapping[int, WorkspaceBounds] = WORKSPACE_RANGES,
) -> np.ndarray:
    """Clamp each axis of ``position`` independently into the DOF's box."""
    return _bounds_for(dof, ranges).clamp(_as_position(position))


def validate_target(
    dof: int,
    position: np.ndarray | list[float],
    policy: str = "clamp",
    ranges: Mapping[int, WorkspaceBounds] = WORKSPACE_RANGES,
) -> np.ndarray:
    """
    Apply the workspace policy to a requested target position.

    Input:
        dof: Chain DOF selecting the workspace box
        position: Requested (x, y, z)
        policy: "clamp" moves out-of-box targets onto the box;
            "reject" raises UnreachableTargetError for them
        ranges: DOF -> WorkspaceBounds table
    Output:
        position to solve for, shape (3,)
    """
    if policy not in WORKSPACE_POLICIES:
        raise ValueError(
            f"Unknown workspace policy '{policy}'. "
            f"Supported: {', '.join(WORKSPACE_POLICIES)}"
        )
    dof = validate_dof(dof)
    position = _as_position(position)
    bounds = _bounds_for(dof, ranges)

    if bounds.contains(position):
        return position

    if policy == "reject":
        raise UnreachableTargetError(
            f"Target {position.tolist()} outside the {dof}-DOF workspace {bounds.to_dict()}"
        )

    clamped = bounds.clamp(position)
    logger.info(
        f"Clamped target {position.tolist()} to {clamped.tolist()} for {dof}-DOF workspace"
    )
    return clamped


def clamp_to_joint_limits(
    joint_positions: np.ndarray,
    lower: np.ndarray | None,
    upper: np.ndarray | None,
) -> np.ndarray:
    """Clamp joint angles into [lower, upper]; a missing side is unbounded."""
    q = np.asarray(joint_positions, dtype=np.float64)
    if lower is None and upper is None:
        return q.copy()
    return np.clip(q, lower, upper)


# --- Internal helper functions ---


def _bounds_for(dof: int, ranges: Mapping[int, WorkspaceBounds]) -> WorkspaceBounds:
    if dof not in ranges:
        available = ", ".join(str(k) for k in sorted(ranges))
        raise InvalidConfigurationError(
            f"No workspace range for DOF {dof}. Available: {available}"
        )
    return ranges[dof]


def _as_position(position: np.ndarray | list[float]) -> np.ndarray:
    try:
        position = np.asarray(position, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidPoseError(f"Position must be numeric: {e}") from e
    if position.shape != (3,):
        raise InvalidPoseError(f"Position must be shape (3,), got {position.shape}")
    if not np.all(np.isfinite(position)):
        raise InvalidPoseError(f"Position must be finite, got {position.tolist()}")
    return position
