import numpy as np

from arm_kinematics.types.robot import WorkspaceBounds

# (theta_offset, d, a, alpha) per joint, base to tip. A chain with N DOF
# uses the first N rows.
DH_TEMPLATE: list[tuple[float, float, float, float]] = [
    (0.0, 0.3, 0.0, np.pi / 2),
    (0.0, 0.0, 0.3, 0.0),
    (0.0, 0.0, 0.3, np.pi / 2),
    (0.0, 0.3, 0.0, -np.pi / 2),
    (0.0, 0.0, 0.3, np.pi / 2),
    (0.0, 0.0, 0.3, -np.pi / 2),
    (0.0, 0.3, 0.0, 0.0),
]

# Empirical reachable boxes per DOF. These are coarse: targets inside a box
# can still be unreachable, which the solver reports as divergence.
WORKSPACE_RANGES: dict[int, WorkspaceBounds] = {
    2: WorkspaceBounds(x=(-0.4, 0.4), y=(-0.4, 0.4), z=(0.3, 0.8)),
    3: WorkspaceBounds(x=(-0.5, 0.5), y=(-0.5, 0.5), z=(0.3, 1.0)),
    4: WorkspaceBounds(x=(-0.6, 0.6), y=(-0.6, 0.6), z=(0.3, 1.1)),
    5: WorkspaceBounds(x=(-0.7, 0.7), y=(-0.7, 0.7), z=(0.3, 1.2)),
    6: WorkspaceBounds(x=(-0.8, 0.8), y=(-0.8, 0.8), z=(0.3, 1.3)),
    7: WorkspaceBounds(x=(-1.0, 1.0), y=(-1.0, 1.0), z=(0.3, 1.5)),
}

# Default solver seed; slightly bent so the template chain starts away from
# its fully extended singular pose.
HOME_JOINTS = np.array([0.1, 0.4, -0.3, 0.2, -0.2, 0.3, 0.1])
