"""
Denavit-Hartenberg forward kinematics.

Frames are rebuilt from the chain and the joint angles on every call;
nothing is cached between calls.
"""

from __future__ import annotations

import numpy as np

from arm_kinematics.config.robot_config import DH_TEMPLATE
from arm_kinematics.errors import InvalidConfigurationError
from arm_kinematics.types import JointConfiguration, KinematicChain, SE3Pose
from arm_kinematics.workspace.validation import validate_dof


def create_chain(dof: int) -> KinematicChain:
    """
    Build a chain from the first ``dof`` rows of the DH template.

    Input:
        dof: Number of revolute joints, in [2, 7]
    Output:
        KinematicChain with ``dof`` joints
    """
    return KinematicChain.from_dh_table(DH_TEMPLATE[: validate_dof(dof)])


def dh_transform(theta: float, d: float, a: float, alpha: float) -> np.ndarray:
    """
    Standard DH homogeneous transform.

    Input:
        theta: Joint angle including offset (radians)
        d: Offset along previous z
        a: Length along new x
        alpha: Twist about new x (radians)
    Output:
        transform, shape (4, 4)
    """
    ct, st = np.cos(theta), np.sin(theta)
    ca, sa = np.cos(alpha), np.sin(alpha)
    return np.array(
        [
            [ct, -st * ca, st * sa, a * ct],
            [st, ct * ca, -ct * sa, a * st],
            [0.0, sa, ca, d],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def compute_forward_kinematics(
    chain: KinematicChain,
    joint_positions: JointConfiguration | np.ndarray | list[float],
) -> tuple[SE3Pose, list[np.ndarray]]:
    """
    Compute the end-effector pose and the cumulative joint frames.

    Input:
        chain: Kinematic chain
        joint_positions: One angle per joint (radians)
    Output:
        (end-effector SE3Pose, frames) where frames[0] is the identity base
        frame and frames[k] = T_1 @ ... @ T_k, so len(frames) == dof + 1.
        Joint k (1-based) rotates about the z axis of frames[k - 1].
    """
    q = _as_angles(chain, joint_positions)

    T = np.eye(4)
    frames = [T]
    for theta, joint in zip(q, chain.joints):
        T = T @ dh_transform(theta + joint.theta_offset, joint.d, joint.a, joint.alpha)
        frames.append(T)

    return SE3Pose.from_matrix(T), frames


def compute_joint_positions(
    chain: KinematicChain,
    joint_positions: JointConfiguration | np.ndarray | list[float],
) -> np.ndarray:
    """
    Origins of the base and every joint frame, for drawing the arm.

    Output:
        positions, shape (dof + 1, 3)
    """
    _, frames = compute_forward_kinematics(chain, joint_positions)
    return np.array([frame[:3, 3] for frame in frames])


def _as_angles(
    chain: KinematicChain,
    joint_positions: JointConfiguration | np.ndarray | list[float],
) -> np.ndarray:
    if isinstance(joint_positions, JointConfiguration):
        q = joint_positions.values
    else:
        q = np.asarray(joint_positions, dtype=np.float64).reshape(-1)
    if len(q) != chain.dof:
        raise InvalidConfigurationError(
            f"Expected {chain.dof} joint values, got {len(q)}"
        )
    return q
