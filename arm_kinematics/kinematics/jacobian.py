"""Geometric Jacobian for revolute DH chains."""

import numpy as np

from arm_kinematics.errors import InvalidConfigurationError
from arm_kinematics.types import KinematicChain


def compute_jacobian(chain: KinematicChain, frames: list[np.ndarray]) -> np.ndarray:
    """
    Compute the world-frame geometric Jacobian at the end effector.

    Input:
        chain: Kinematic chain the frames were computed for
        frames: Output of compute_forward_kinematics, length dof + 1
    Output:
        Jacobian matrix, shape (6, dof); rows are [linear; angular]
    """
    if len(frames) != chain.dof + 1:
        raise InvalidConfigurationError(
            f"Expected {chain.dof + 1} frames for a {chain.dof}-DOF chain, "
            f"got {len(frames)}"
        )

    p_end = frames[-1][:3, 3]
    J = np.zeros((6, chain.dof))
    for i in range(chain.dof):
        # Joint i + 1 turns about z of the frame before it
        z_i = frames[i][:3, 2]
        p_i = frames[i][:3, 3]
        J[:3, i] = np.cross(z_i, p_end - p_i)
        J[3:, i] = z_i
    return J
