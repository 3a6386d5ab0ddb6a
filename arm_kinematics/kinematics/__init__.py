from .forward_kinematics import (
    compute_forward_kinematics,
    compute_joint_positions,
    create_chain,
    dh_transform,
)
from .ik_solver import solve_ik, solve_ik_position_only
from .jacobian import compute_jacobian
from .pose_error import compute_pose_error, split_error_norms, within_tolerance

__all__ = [
    # Chain model
    "create_chain",
    "dh_transform",
    "compute_forward_kinematics",
    "compute_joint_positions",
    # Jacobian / error
    "compute_jacobian",
    "compute_pose_error",
    "split_error_norms",
    "within_tolerance",
    # Solver
    "solve_ik",
    "solve_ik_position_only",
]
