from .validation import (
    clamp_to_joint_limits,
    clamp_to_workspace,
    validate_dof,
    validate_target,
)

__all__ = [
    "validate_dof",
    "validate_target",
    "clamp_to_workspace",
    "clamp_to_joint_limits",
]
