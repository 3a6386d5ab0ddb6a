"""Solve IK for the template arm from the command line.

    arm-ik --x 0.2 --y 0.1 --z 0.6 --dof 7
    arm-ik --x 0.9 --y 0 --z 0.5 --dof 3 --policy reject
"""

import json
import logging

from fire import Fire

from arm_kinematics.config.ik_config import IKConfig
from arm_kinematics.core.kinematics_service import KinematicsService


def main(
    x: float,
    y: float,
    z: float,
    roll: float = 0.0,
    pitch: float = 0.0,
    yaw: float = 0.0,
    dof: int = 7,
    max_iterations: int = 100,
    position_only: bool | None = None,
    policy: str = "clamp",
    verbose: bool = False,
):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    service = KinematicsService(
        IKConfig(max_iterations=max_iterations), workspace_policy=policy
    )
    payload = {
        "position": {"x": x, "y": y, "z": z},
        "orientation": {"roll": roll, "pitch": pitch, "yaw": yaw},
        "dof": dof,
    }
    if position_only is not None:
        payload["positionOnly"] = position_only

    response = service.handle(payload)
    print(json.dumps(response.to_dict(), indent=2))


def cli():
    Fire(main)


if __name__ == "__main__":
    cli()
