from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from arm_kinematics.errors import InvalidConfigurationError

MIN_DOF = 2
MAX_DOF = 7


@dataclass(frozen=True)
class JointParameter:
    """Fixed DH constants for one revolute joint.

    ``theta_offset`` is added to the variable joint angle.
    """

    theta_offset: float
    d: float
    a: float
    alpha: float

    def __post_init__(self):
        for name in ("theta_offset", "d", "a", "alpha"):
            value = float(getattr(self, name))
            if not np.isfinite(value):
                raise InvalidConfigurationError(
                    f"DH parameter '{name}' must be finite, got {value}"
                )
            object.__setattr__(self, name, value)


@dataclass(frozen=True)
class KinematicChain:
    """Ordered base-to-tip sequence of revolute joints."""

    joints: tuple[JointParameter, ...]

    def __post_init__(self):
        joints = tuple(self.joints)
        if not MIN_DOF <= len(joints) <= MAX_DOF:
            raise InvalidConfigurationError(
                f"DOF must be in [{MIN_DOF}, {MAX_DOF}], got {len(joints)}"
            )
        object.__setattr__(self, "joints", joints)

    @property
    def dof(self) -> int:
        return len(self.joints)

    def __len__(self) -> int:
        return len(self.joints)

    @classmethod
    def from_dh_table(cls, rows: Iterable[Sequence[float]]) -> "KinematicChain":
        """Create a chain from (theta_offset, d, a, alpha) rows."""
        joints = []
        for row in rows:
            if len(row) != 4:
                raise InvalidConfigurationError(
                    f"DH row must have 4 entries (theta_offset, d, a, alpha), got {len(row)}"
                )
            joints.append(JointParameter(*row))
        return cls(joints=tuple(joints))

    def to_dh_table(self) -> np.ndarray:
        """DH table as an array of shape (dof, 4)."""
        return np.array(
            [[j.theta_offset, j.d, j.a, j.alpha] for j in self.joints],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class JointConfiguration:
    """
    Joint angles (radians), one per joint in base-to-tip order.

    Optional ``bounds`` hold one (min, max) pair per joint; the solver never
    produces values outside them.
    """

    values: np.ndarray
    bounds: tuple[tuple[float, float], ...] | None = None

    def __post_init__(self):
        values = np.array(self.values, dtype=np.float64).reshape(-1)
        if not np.all(np.isfinite(values)):
            raise InvalidConfigurationError(
                f"Joint values must be finite, got {values.tolist()}"
            )
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

        if self.bounds is not None:
            bounds = tuple((float(lo), float(hi)) for lo, hi in self.bounds)
            if len(bounds) != len(values):
                raise InvalidConfigurationError(
                    f"Expected {len(values)} joint bounds, got {len(bounds)}"
                )
            for i, (lo, hi) in enumerate(bounds):
                if np.isnan(lo) or np.isnan(hi) or lo > hi:
                    raise InvalidConfigurationError(
                        f"Invalid bounds for joint {i}: [{lo}, {hi}]"
                    )
            object.__setattr__(self, "bounds", bounds)

    @property
    def dof(self) -> int:
        return len(self.values)

    @property
    def lower(self) -> np.ndarray | None:
        if self.bounds is None:
            return None
        return np.array([lo for lo, _ in self.bounds])

    @property
    def upper(self) -> np.ndarray | None:
        if self.bounds is None:
            return None
        return np.array([hi for _, hi in self.bounds])

    def with_values(self, values: np.ndarray | list[float]) -> "JointConfiguration":
        """New configuration with the same bounds."""
        return JointConfiguration(values=np.asarray(values), bounds=self.bounds)

    def to_array(self) -> np.ndarray:
        return self.values.copy()


@dataclass(frozen=True)
class WorkspaceBounds:
    """Axis-aligned reachable box, one (min, max) range per axis."""

    x: tuple[float, float]
    y: tuple[float, float]
    z: tuple[float, float]

    def __post_init__(self):
        for axis in ("x", "y", "z"):
            lo, hi = getattr(self, axis)
            if lo > hi:
                raise ValueError(f"Workspace range for {axis} is empty: [{lo}, {hi}]")

    @property
    def lower(self) -> np.ndarray:
        return np.array([self.x[0], self.y[0], self.z[0]])

    @property
    def upper(self) -> np.ndarray:
        return np.array([self.x[1], self.y[1], self.z[1]])

    def contains(self, position: np.ndarray) -> bool:
        position = np.asarray(position, dtype=np.float64)
        return bool(np.all(position >= self.lower) and np.all(position <= self.upper))

    def clamp(self, position: np.ndarray) -> np.ndarray:
        return np.clip(np.asarray(position, dtype=np.float64), self.lower, self.upper)

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            axis: {"min": getattr(self, axis)[0], "max": getattr(self, axis)[1]}
            for axis in ("x", "y", "z")
        }
