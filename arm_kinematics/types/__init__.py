from arm_kinematics.config.ik_config import IKConfig
from arm_kinematics.dataclass.ik_types import IKResult, IKStatus, SE3Pose

from .robot import (
    MAX_DOF,
    MIN_DOF,
    JointConfiguration,
    JointParameter,
    KinematicChain,
    WorkspaceBounds,
)

__all__ = [
    # Geometry
    "SE3Pose",
    # IK
    "IKConfig",
    "IKResult",
    "IKStatus",
    # Robot
    "MIN_DOF",
    "MAX_DOF",
    "JointParameter",
    "KinematicChain",
    "JointConfiguration",
    "WorkspaceBounds",
]
