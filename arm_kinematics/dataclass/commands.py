from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from arm_kinematics.dataclass.ik_types import IKResult
from arm_kinematics.errors import (
    InvalidConfigurationError,
    InvalidPoseError,
    KinematicsError,
)
from arm_kinematics.workspace.validation import validate_dof


@dataclass
class IKRequest:
    """
    Represents an inverse kinematics request.
    Orientation is roll-pitch-yaw in radians.
    """

    position: tuple[float, float, float]
    orientation: tuple[float, float, float]
    dof: int
    seed: list[float] | None = None
    joint_limits: list[tuple[float, float]] | None = None
    position_only: bool | None = None
    max_iterations: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IKRequest":
        if not isinstance(data, dict):
            raise InvalidPoseError("Request body must be a JSON object")

        position = _read_triple(data, "position", ("x", "y", "z"))
        if data.get("orientation") is None:
            orientation = (0.0, 0.0, 0.0)
        else:
            orientation = _read_triple(data, "orientation", ("roll", "pitch", "yaw"))

        if "dof" not in data:
            raise InvalidConfigurationError("Missing 'dof'")
        dof = validate_dof(data["dof"])

        seed = None
        if data.get("seed") is not None:
            try:
                seed = [float(v) for v in data["seed"]]
            except (TypeError, ValueError) as e:
                raise InvalidConfigurationError(f"Invalid seed: {e}") from e
            if len(seed) != dof:
                raise InvalidConfigurationError(
                    f"Expected {dof} seed values, got {len(seed)}"
                )

        joint_limits = None
        if data.get("jointLimits") is not None:
            try:
                joint_limits = [(float(lo), float(hi)) for lo, hi in data["jointLimits"]]
            except (TypeError, ValueError) as e:
                raise InvalidConfigurationError(f"Invalid jointLimits: {e}") from e
            if len(joint_limits) != dof:
                raise InvalidConfigurationError(
                    f"Expected {dof} joint limits, got {len(joint_limits)}"
                )

        position_only = data.get("positionOnly")
        if position_only is not None and not isinstance(position_only, bool):
            raise InvalidConfigurationError("'positionOnly' must be a boolean")

        max_iterations = data.get("maxIterations")
        if max_iterations is not None:
            if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
                raise InvalidConfigurationError("'maxIterations' must be an integer")
            if max_iterations < 1:
                raise InvalidConfigurationError("'maxIterations' must be >= 1")

        return cls(
            position=position,
            orientation=orientation,
            dof=dof,
            seed=seed,
            joint_limits=joint_limits,
            position_only=position_only,
            max_iterations=max_iterations,
        )


@dataclass
class IKResponse:
    """
    Represents the reply to an IKRequest.
    ``error`` is None on success, otherwise one of the error codes.
    """

    joint_angles: list[float] | None = None
    converged: bool = False
    iterations: int | None = None
    residual_error: float | None = None
    computation_time_seconds: float | None = None
    error: str | None = None
    message: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def from_result(cls, result: IKResult) -> "IKResponse":
        return cls(
            joint_angles=result.joint_positions.tolist(),
            converged=result.converged,
            iterations=result.iterations,
            residual_error=result.final_error,
            computation_time_seconds=result.elapsed_time,
        )

    @classmethod
    def from_error(cls, error: KinematicsError) -> "IKResponse":
        response = cls(error=error.code, message=error.message)
        if error.result is not None:
            response.joint_angles = error.result.joint_positions.tolist()
            response.iterations = error.result.iterations
            response.residual_error = error.result.final_error
            response.computation_time_seconds = error.result.elapsed_time
        return response

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {
                "jointAngles": self.joint_angles,
                "converged": self.converged,
                "iterations": self.iterations,
                "residualError": self.residual_error,
                "computationTimeSeconds": self.computation_time_seconds,
            }

        data: dict[str, Any] = {"error": self.error, "message": self.message}
        if self.iterations is not None:
            data.update(
                {
                    "jointAngles": self.joint_angles,
                    "converged": False,
                    "iterations": self.iterations,
                    "residualError": self.residual_error,
                    "computationTimeSeconds": self.computation_time_seconds,
                }
            )
        return data


def _read_triple(
    data: dict[str, Any], key: str, names: tuple[str, str, str]
) -> tuple[float, float, float]:
    block = data.get(key)
    if not isinstance(block, dict):
        raise InvalidPoseError(f"'{key}' must be an object with keys {', '.join(names)}")
    values = []
    for name in names:
        if name not in block:
            raise InvalidPoseError(f"Missing '{key}.{name}'")
        value = block[name]
        if isinstance(value, bool):
            raise InvalidPoseError(f"'{key}.{name}' must be a number")
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidPoseError(f"'{key}.{name}' must be a number") from e
        if not math.isfinite(value):
            raise InvalidPoseError(f"'{key}.{name}' must be finite, got {value}")
        values.append(value)
    return values[0], values[1], values[2]
