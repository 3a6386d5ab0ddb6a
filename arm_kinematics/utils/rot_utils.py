"""Rotation utility functions for conversions between representations.

Quaternions are (w, x, y, z) throughout this package. Roll-pitch-yaw are
extrinsic XYZ angles, i.e. R = Rz(yaw) @ Ry(pitch) @ Rx(roll).
"""

import numpy as np
from scipy.spatial.transform import Rotation


def quaternion_to_matrix(quat: np.ndarray) -> np.ndarray:
    """
    Convert quaternion to 3x3 rotation matrix.

    Input:
        quat: Quaternion in (w, x, y, z) format, shape (4,)
    Output:
        rotation matrix, shape (3, 3)
    """
    w, x, y, z = np.asarray(quat, dtype=np.float64)
    return Rotation.from_quat([x, y, z, w]).as_matrix()


def matrix_to_quaternion(rot: np.ndarray) -> np.ndarray:
    """
    Convert 3x3 rotation matrix to quaternion.

    Input:
        rot: Rotation matrix, shape (3, 3)
    Output:
        quaternion in (w, x, y, z) format, shape (4,), with w >= 0
    """
    x, y, z, w = Rotation.from_matrix(np.asarray(rot, dtype=np.float64)).as_quat()
    quat = np.array([w, x, y, z])
    # q and -q encode the same rotation
    if w < 0:
        quat = -quat
    return quat


def rpy_to_matrix(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """
    Convert roll-pitch-yaw (XYZ Euler angles) to rotation matrix.

    Input:
        roll: Rotation around X axis (radians)
        pitch: Rotation around Y axis (radians)
        yaw: Rotation around Z axis (radians)
    Output:
        rotation matrix, shape (3, 3)
    """
    return Rotation.from_euler("xyz", [roll, pitch, yaw]).as_matrix()


def matrix_to_rpy(rot: np.ndarray) -> tuple[float, float, float]:
    """
    Convert rotation matrix to roll-pitch-yaw (XYZ Euler angles).

    Only meant for display; at pitch = +-pi/2 the split between roll and
    yaw is arbitrary.
    """
    roll, pitch, yaw = Rotation.from_matrix(np.asarray(rot, dtype=np.float64)).as_euler(
        "xyz"
    )
    return float(roll), float(pitch), float(yaw)


def matrix_to_rotation_vector(rot: np.ndarray) -> np.ndarray:
    """
    Convert rotation matrix to a rotation vector (axis scaled by angle).

    Input:
        rot: Rotation matrix, shape (3, 3)
    Output:
        rotation vector, shape (3,), norm in [0, pi]
    """
    return Rotation.from_matrix(np.asarray(rot, dtype=np.float64)).as_rotvec()


def rotation_vector_to_matrix(rotvec: np.ndarray) -> np.ndarray:
    """Convert a rotation vector (axis * angle) to a 3x3 rotation matrix."""
    return Rotation.from_rotvec(np.asarray(rotvec, dtype=np.float64)).as_matrix()


def axis_angle_to_matrix(axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Convert axis-angle representation to rotation matrix.

    Input:
        axis: Rotation axis, shape (3,); normalized here
        angle: Rotation angle in radians
    Output:
        rotation matrix, shape (3, 3)
    """
    axis = np.asarray(axis, dtype=np.float64)
    norm = np.linalg.norm(axis)
    if norm < 1e-12:
        raise ValueError(f"Rotation axis too small to normalize: {axis}")
    return rotation_vector_to_matrix(axis / norm * angle)


def relative_rotation(rot_target: np.ndarray, rot_current: np.ndarray) -> np.ndarray:
    """Rotation taking ``rot_current`` onto ``rot_target`` in the world frame."""
    return np.asarray(rot_target, dtype=np.float64) @ np.asarray(
        rot_current, dtype=np.float64
    ).T
