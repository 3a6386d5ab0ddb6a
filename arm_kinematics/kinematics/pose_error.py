import numpy as np

from arm_kinematics.types import SE3Pose
from arm_kinematics.utils.rot_utils import matrix_to_rotation_vector, relative_rotation


def compute_pose_error(current: SE3Pose, target: SE3Pose) -> np.ndarray:
    """
    Compute the 6D error that moves ``current`` onto ``target``.

    Input:
        current: Current end-effector pose
        target: Desired end-effector pose
    Output:
        error, shape (6,): [target - current position; rotation vector of
        R_target @ R_current^T], both expressed in the world frame
    """
    position_error = target.position - current.position
    rotation_error = matrix_to_rotation_vector(
        relative_rotation(target.rotation, current.rotation)
    )
    return np.concatenate([position_error, rotation_error])


def split_error_norms(error: np.ndarray) -> tuple[float, float]:
    """Position and orientation error magnitudes of a 3D or 6D error vector."""
    position_error = float(np.linalg.norm(error[:3]))
    orientation_error = float(np.linalg.norm(error[3:])) if len(error) > 3 else 0.0
    return position_error, orientation_error


def within_tolerance(
    position_error: float,
    orientation_error: float,
    position_tolerance: float,
    orientation_tolerance: float,
) -> bool:
    return (
        position_error < position_tolerance
        and orientation_error < orientation_tolerance
    )
