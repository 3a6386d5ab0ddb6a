import numpy as np
import pytest

from arm_kinematics.kinematics import create_chain
from arm_kinematics.types import KinematicChain


@pytest.fixture
def planar_chain() -> KinematicChain:
    """Two-link planar arm, both links 0.3 m, rotating about world z."""
    return KinematicChain.from_dh_table([(0.0, 0.0, 0.3, 0.0), (0.0, 0.0, 0.3, 0.0)])


@pytest.fixture
def chain7() -> KinematicChain:
    return create_chain(7)


@pytest.fixture
def q7() -> np.ndarray:
    return np.array([0.3, -0.4, 0.5, 0.6, -0.2, 0.4, 0.1])
