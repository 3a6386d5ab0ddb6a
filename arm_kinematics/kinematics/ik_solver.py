"""
Inverse kinematics for DH chains.

This module provides functional interfaces for solving IK problems using
damped least squares with Levenberg-Marquardt damping adaptation: a step
that does not reduce the residual is rejected and retried from the same
configuration with a larger damping factor.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

import numpy as np

from arm_kinematics.config.ik_config import IKConfig
from arm_kinematics.errors import InvalidConfigurationError
from arm_kinematics.kinematics.forward_kinematics import compute_forward_kinematics
from arm_kinematics.kinematics.jacobian import compute_jacobian
from arm_kinematics.kinematics.pose_error import (
    compute_pose_error,
    split_error_norms,
    within_tolerance,
)
from arm_kinematics.types import (
    IKResult,
    IKStatus,
    JointConfiguration,
    KinematicChain,
    SE3Pose,
)
from arm_kinematics.workspace.validation import clamp_to_joint_limits

logger = logging.getLogger("IKSolver")


def solve_ik(
    chain: KinematicChain,
    target_pose: SE3Pose,
    initial_config: JointConfiguration | np.ndarray | list[float],
    config: IKConfig | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> IKResult:
    """
    Solve inverse kinematics using damped least squares method.

    Input:
        chain: Kinematic chain to solve for
        target_pose: Target SE3 pose for the end effector
        initial_config: Seed configuration; bounds on a JointConfiguration
            are respected for every evaluated configuration
        config: IK solver configuration (uses defaults if None)
        should_stop: Optional hook polled once per iteration; returning
            True ends the solve with IKStatus.CANCELLED
    Output:
        IKResult containing solution status and joint positions
    """
    if config is None:
        config = IKConfig()

    return _solve(
        chain,
        target_pose,
        initial_config,
        config,
        position_only=config.position_only,
        should_stop=should_stop,
    )


def solve_ik_position_only(
    chain: KinematicChain,
    target_position: np.ndarray | list[float],
    initial_config: JointConfiguration | np.ndarray | list[float],
    config: IKConfig | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> IKResult:
    """
    Solve inverse kinematics for position only (ignores orientation).

    Input:
        chain: Kinematic chain to solve for
        target_position: Target position (3,) for the end effector
        initial_config: Seed configuration
        config: IK solver configuration (uses defaults if None)
        should_stop: Optional cancellation hook, see solve_ik
    Output:
        IKResult containing solution status and joint positions
    """
    if config is None:
        config = IKConfig()

    target_pose = SE3Pose(position=target_position, rotation=np.eye(3))
    return _solve(
        chain,
        target_pose,
        initial_config,
        config,
        position_only=True,
        should_stop=should_stop,
    )


# --- Internal helper functions ---


def _solve(
    chain: KinematicChain,
    target_pose: SE3Pose,
    initial_config: JointConfiguration | np.ndarray | list[float],
    config: IKConfig,
    position_only: bool,
    should_stop: Callable[[], bool] | None,
) -> IKResult:
    start_time = time.perf_counter()

    seed = _as_joint_configuration(chain, initial_config)
    if config.use_limits:
        q_min, q_max = seed.lower, seed.upper
    else:
        q_min, q_max = None, None

    q = clamp_to_joint_limits(seed.values, q_min, q_max)
    error, frames = _evaluate(chain, q, target_pose, position_only)
    residual = float(np.linalg.norm(error))
    damping = config.initial_damping

    iterations = 0
    status: IKStatus | None = None

    while status is None:
        position_error, orientation_error = split_error_norms(error)

        # Check convergence
        if within_tolerance(
            position_error,
            orientation_error,
            config.position_tolerance,
            config.orientation_tolerance,
        ):
            status = IKStatus.SUCCESS
            break

        if iterations >= config.max_iterations:
            status = IKStatus.MAX_ITERATIONS
            break

        if should_stop is not None and should_stop():
            status = IKStatus.CANCELLED
            break

        iterations += 1

        J = compute_jacobian(chain, frames)
        if position_only:
            J = J[:3, :]

        saturated_retries = 0
        while True:
            dq = _damped_step(J, error, damping)

            if dq is not None:
                q_trial = clamp_to_joint_limits(q + dq, q_min, q_max)
                trial_error, trial_frames = _evaluate(
                    chain, q_trial, target_pose, position_only
                )
                trial_residual = float(np.linalg.norm(trial_error))

                if trial_residual < residual:
                    q, error, frames, residual = (
                        q_trial,
                        trial_error,
                        trial_frames,
                        trial_residual,
                    )
                    damping = max(damping / config.damping_shrink, config.min_damping)
                    break

            # Rejected: keep q, stiffen the step
            if damping >= config.max_damping:
                saturated_retries += 1
                if saturated_retries >= config.max_saturated_retries:
                    status = IKStatus.DIVERGENT
                    break
            damping = min(damping * config.damping_growth, config.max_damping)

    position_error, orientation_error = split_error_norms(error)
    elapsed = time.perf_counter() - start_time

    logger.debug(
        f"{chain.dof}-DOF solve finished: {status.value}, iterations={iterations}, "
        f"residual={residual:.3e}, damping={damping:.1e}, time={elapsed:.4f}s"
    )

    return IKResult(
        status=status,
        joint_positions=q,
        final_error=residual,
        iterations=iterations,
        position_error=position_error,
        orientation_error=orientation_error,
        elapsed_time=elapsed,
    )


def _evaluate(
    chain: KinematicChain,
    q: np.ndarray,
    target_pose: SE3Pose,
    position_only: bool,
) -> tuple[np.ndarray, list[np.ndarray]]:
    """Pose error and frames at configuration q."""
    current_pose, frames = compute_forward_kinematics(chain, q)
    error = compute_pose_error(current_pose, target_pose)
    if position_only:
        error = error[:3]
    return error, frames


def _damped_step(J: np.ndarray, error: np.ndarray, damping: float) -> np.ndarray | None:
    """Solve (J^T J + lambda^2 I) dq = J^T e; None if the system is singular."""
    n = J.shape[1]
    JTJ = J.T @ J
    damping_matrix = damping**2 * np.eye(n)

    try:
        dq = np.linalg.solve(JTJ + damping_matrix, J.T @ error)
    except np.linalg.LinAlgError:
        return None

    if not np.all(np.isfinite(dq)):
        return None
    return dq


def _as_joint_configuration(
    chain: KinematicChain,
    initial_config: JointConfiguration | np.ndarray | list[float],
) -> JointConfiguration:
    if isinstance(initial_config, JointConfiguration):
        seed = initial_config
    else:
        seed = JointConfiguration(values=np.asarray(initial_config, dtype=np.float64))
    if seed.dof != chain.dof:
        raise InvalidConfigurationError(
            f"Expected {chain.dof} seed values, got {seed.dof}"
        )
    return seed
