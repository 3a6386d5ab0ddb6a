from dataclasses import dataclass

from arm_kinematics.errors import InvalidConfigurationError


@dataclass
class IKConfig:
    """Configuration parameters for the damped least squares IK solver."""

    max_iterations: int = 100
    position_tolerance: float = 1e-4  # meters
    orientation_tolerance: float = 1e-3  # radians
    initial_damping: float = 0.01  # Starting lambda
    damping_growth: float = 10.0  # lambda *= growth on a rejected step
    damping_shrink: float = 10.0  # lambda /= shrink on an accepted step
    min_damping: float = 1e-6
    max_damping: float = 1e6
    max_saturated_retries: int = 3  # Rejections at max_damping before giving up
    use_limits: bool = True  # Respect joint bounds when present
    position_only: bool = False  # Ignore orientation rows

    def __post_init__(self):
        if self.max_iterations < 1:
            raise InvalidConfigurationError("max_iterations must be >= 1")
        if self.position_tolerance <= 0:
            raise InvalidConfigurationError("position_tolerance must be > 0")
        if self.orientation_tolerance <= 0:
            raise InvalidConfigurationError("orientation_tolerance must be > 0")
        if not 0 < self.min_damping <= self.initial_damping <= self.max_damping:
            raise InvalidConfigurationError(
                "damping must satisfy 0 < min_damping <= initial_damping <= max_damping"
            )
        if self.damping_growth <= 1:
            raise InvalidConfigurationError("damping_growth must be > 1")
        if self.damping_shrink <= 1:
            raise InvalidConfigurationError("damping_shrink must be > 1")
        if self.max_saturated_retries < 1:
            raise InvalidConfigurationError("max_saturated_retries must be >= 1")
