from dataclasses import dataclass
from enum import Enum

import numpy as np

from arm_kinematics.errors import (
    ConvergenceFailureError,
    InvalidPoseError,
    UnreachableTargetError,
)
from arm_kinematics.utils.rot_utils import (
    matrix_to_quaternion,
    matrix_to_rotation_vector,
    matrix_to_rpy,
    quaternion_to_matrix,
    rpy_to_matrix,
)


class IKStatus(Enum):
    """Status of IK solution attempt."""

    SUCCESS = "success"
    MAX_ITERATIONS = "max_iterations"
    DIVERGENT = "divergent"
    CANCELLED = "cancelled"


@dataclass
class SE3Pose:
    """
    Represents a 6D pose in SE(3) - position and orientation.
    Orientation is stored as a 3x3 rotation matrix.
    """

    position: np.ndarray  # (3,) xyz
    rotation: np.ndarray  # (3, 3) rotation matrix

    def __post_init__(self):
        try:
            self.position = np.asarray(self.position, dtype=np.float64)
            self.rotation = np.asarray(self.rotation, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidPoseError(f"Pose components must be numeric: {e}") from e
        if self.position.shape != (3,):
            raise InvalidPoseError(
                f"Position must be shape (3,), got {self.position.shape}"
            )
        if self.rotation.shape != (3, 3):
            raise InvalidPoseError(
                f"Rotation must be shape (3, 3), got {self.rotation.shape}"
            )
        if not (np.all(np.isfinite(self.position)) and np.all(np.isfinite(self.rotation))):
            raise InvalidPoseError("Pose components must be finite")

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "SE3Pose":
        """Create SE3Pose from 4x4 homogeneous transformation matrix."""
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise InvalidPoseError(f"Matrix must be shape (4, 4), got {matrix.shape}")
        return cls(position=matrix[:3, 3].copy(), rotation=matrix[:3, :3].copy())

    @classmethod
    def from_position_quat(
        cls, position: np.ndarray, quaternion: np.ndarray
    ) -> "SE3Pose":
        """Create SE3Pose from position and quaternion (w, x, y, z)."""
        quaternion = np.asarray(quaternion, dtype=np.float64)
        if quaternion.shape != (4,) or not np.all(np.isfinite(quaternion)):
            raise InvalidPoseError(f"Quaternion must be 4 finite values, got {quaternion}")
        if np.linalg.norm(quaternion) < 1e-12:
            raise InvalidPoseError("Quaternion must have non-zero norm")
        return cls(position=position, rotation=quaternion_to_matrix(quaternion))

    @classmethod
    def from_position_rpy(
        cls, position: np.ndarray, roll: float, pitch: float, yaw: float
    ) -> "SE3Pose":
        """Create SE3Pose from position and roll-pitch-yaw angles."""
        angles = np.array([roll, pitch, yaw], dtype=np.float64)
        if not np.all(np.isfinite(angles)):
            raise InvalidPoseError(f"Orientation must be finite, got {angles.tolist()}")
        return cls(position=position, rotation=rpy_to_matrix(*angles))

    def to_matrix(self) -> np.ndarray:
        """Convert to 4x4 homogeneous transformation matrix."""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation
        matrix[:3, 3] = self.position
        return matrix

    def to_quaternion(self) -> np.ndarray:
        """Convert rotation to quaternion (w, x, y, z)."""
        return matrix_to_quaternion(self.rotation)

    def to_rpy(self) -> tuple[float, float, float]:
        """Convert rotation to roll-pitch-yaw angles."""
        return matrix_to_rpy(self.rotation)

    def to_rotation_vector(self) -> np.ndarray:
        """Convert rotation to axis * angle."""
        return matrix_to_rotation_vector(self.rotation)


@dataclass(frozen=True, eq=False)
class IKResult:
    """Result of an IK solution attempt."""

    status: IKStatus
    joint_positions: np.ndarray  # Last accepted configuration
    final_error: float  # Norm of the final pose error vector
    iterations: int  # Number of solver steps taken
    position_error: float  # Final position error (meters)
    orientation_error: float  # Final orientation error (radians)
    elapsed_time: float = 0.0  # Wall time of the solve (seconds)

    def __post_init__(self):
        joint_positions = np.array(self.joint_positions, dtype=np.float64)
        joint_positions.setflags(write=False)
        object.__setattr__(self, "joint_positions", joint_positions)

    @property
    def converged(self) -> bool:
        return self.status == IKStatus.SUCCESS

    def raise_for_status(self) -> None:
        """Raise the matching error if the solve did not converge."""
        if self.converged:
            return
        summary = (
            f"residual={self.final_error:.6g} after {self.iterations} iterations"
        )
        if self.status == IKStatus.DIVERGENT:
            raise UnreachableTargetError(
                f"Damping saturated without progress ({summary})", result=self
            )
        if self.status == IKStatus.CANCELLED:
            raise ConvergenceFailureError(f"Solve cancelled ({summary})", result=self)
        raise ConvergenceFailureError(
            f"Iteration budget exhausted ({summary})", result=self
        )
