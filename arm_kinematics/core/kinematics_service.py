import logging
from dataclasses import replace
from typing import Any, Mapping

import numpy as np

from arm_kinematics.config.ik_config import IKConfig
from arm_kinematics.config.robot_config import HOME_JOINTS, WORKSPACE_RANGES
from arm_kinematics.dataclass.commands import IKRequest, IKResponse
from arm_kinematics.errors import KinematicsError
from arm_kinematics.kinematics import create_chain, solve_ik
from arm_kinematics.types import IKResult, JointConfiguration, SE3Pose, WorkspaceBounds
from arm_kinematics.workspace.validation import WORKSPACE_POLICIES, validate_target

logger = logging.getLogger("KinematicsService")

# Below this many joints an arbitrary orientation is generally unreachable
FULL_POSE_MIN_DOF = 6


class KinematicsService:
    """
    Request/response boundary of the kinematics engine.

    Holds only immutable settings, so one instance can serve concurrent
    requests from several threads.
    """

    def __init__(
        self,
        config: IKConfig | None = None,
        workspace_policy: str = "clamp",
        workspace_ranges: Mapping[int, WorkspaceBounds] | None = None,
    ):
        if workspace_policy not in WORKSPACE_POLICIES:
            raise ValueError(
                f"Unknown workspace policy '{workspace_policy}'. "
                f"Supported: {', '.join(WORKSPACE_POLICIES)}"
            )
        self.config = config if config is not None else IKConfig()
        self.workspace_policy = workspace_policy
        self.workspace_ranges = (
            dict(workspace_ranges) if workspace_ranges is not None else WORKSPACE_RANGES
        )

    def solve(self, request: IKRequest) -> IKResult:
        """
        Run one IK solve for a parsed request.

        Raises InvalidConfigurationError / InvalidPoseError for bad input and
        UnreachableTargetError when the "reject" workspace policy applies.
        Solver outcomes are returned, not raised.
        """
        chain = create_chain(request.dof)
        position = validate_target(
            request.dof,
            request.position,
            policy=self.workspace_policy,
            ranges=self.workspace_ranges,
        )
        target = SE3Pose.from_position_rpy(position, *request.orientation)

        seed_values = (
            np.asarray(request.seed) if request.seed is not None else HOME_JOINTS[: chain.dof]
        )
        seed = JointConfiguration(values=seed_values, bounds=request.joint_limits)

        position_only = (
            request.position_only
            if request.position_only is not None
            else chain.dof < FULL_POSE_MIN_DOF
        )
        config = replace(
            self.config,
            position_only=position_only,
            max_iterations=request.max_iterations or self.config.max_iterations,
        )

        return solve_ik(chain, target, seed, config)

    def handle(self, payload: dict[str, Any]) -> IKResponse:
        """Parse, solve and map the outcome onto an IKResponse."""
        try:
            request = IKRequest.from_dict(payload)
            logger.info(
                f"IK request: dof={request.dof}, position={list(request.position)}, "
                f"orientation={list(request.orientation)}"
            )
            result = self.solve(request)
            result.raise_for_status()
        except KinematicsError as e:
            logger.warning(f"IK request failed with {e.code}: {e.message}")
            return IKResponse.from_error(e)

        logger.info(
            f"IK converged in {result.iterations} iterations "
            f"(residual={result.final_error:.2e}, time={result.elapsed_time:.4f}s)"
        )
        return IKResponse.from_result(result)
