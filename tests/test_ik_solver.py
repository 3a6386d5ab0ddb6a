import dataclasses

import numpy as np
import pytest

import arm_kinematics.kinematics.ik_solver as ik_solver
from arm_kinematics.config.ik_config import IKConfig
from arm_kinematics.errors import (
    ConvergenceFailureError,
    InvalidConfigurationError,
    UnreachableTargetError,
)
from arm_kinematics.kinematics import (
    compute_forward_kinematics,
    compute_pose_error,
    create_chain,
    solve_ik,
    solve_ik_position_only,
    split_error_norms,
)
from arm_kinematics.types import IKStatus, JointConfiguration, SE3Pose
from arm_kinematics.utils.rot_utils import rpy_to_matrix


def _wrap(angles):
    return np.angle(np.exp(1j * np.asarray(angles)))


def _achieved_errors(chain, q, target):
    pose, _ = compute_forward_kinematics(chain, q)
    return split_error_norms(compute_pose_error(pose, target))


@pytest.mark.parametrize("dof", range(2, 8))
def test_forward_inverse_round_trip(dof):
    chain = create_chain(dof)
    q_true = np.array([0.3, -0.4, 0.5, 0.6, -0.2, 0.4, 0.1])[:dof]
    target, _ = compute_forward_kinematics(chain, q_true)
    seed = q_true + 0.05 * np.array([1, -1, 1, -1, 1, -1, 1])[:dof]

    result = solve_ik(chain, target, seed)

    assert result.converged
    assert result.status == IKStatus.SUCCESS
    position_error, orientation_error = _achieved_errors(
        chain, result.joint_positions, target
    )
    assert position_error < 1e-4
    assert orientation_error < 1e-3
    assert result.position_error == pytest.approx(position_error)
    assert result.orientation_error == pytest.approx(orientation_error)


def test_planar_two_link_closed_form(planar_chain):
    target = SE3Pose(position=[0.3, 0.3, 0.0], rotation=rpy_to_matrix(0, 0, np.pi / 2))

    result = solve_ik(planar_chain, target, [0.3, 1.2])

    assert result.converged
    # Closed form: cos(q2) = (x^2 + y^2 - a1^2 - a2^2) / (2 a1 a2) = 0
    solutions = []
    for q2 in (np.pi / 2, -np.pi / 2):
        q1 = np.arctan2(0.3, 0.3) - np.arctan2(0.3 * np.sin(q2), 0.3 + 0.3 * np.cos(q2))
        solutions.append(np.array([q1, q2]))
    distances = [
        np.max(np.abs(_wrap(result.joint_positions - s))) for s in solutions
    ]
    assert min(distances) < 1e-3


def test_planar_two_link_position_only(planar_chain):
    result = solve_ik_position_only(planar_chain, [0.3, 0.3, 0.0], [0.3, 1.2])

    assert result.converged
    assert result.orientation_error == 0.0
    pose, _ = compute_forward_kinematics(planar_chain, result.joint_positions)
    np.testing.assert_allclose(pose.position, [0.3, 0.3, 0.0], atol=1e-4)


def test_position_only_on_template_chain():
    chain = create_chain(3)
    target, _ = compute_forward_kinematics(chain, [0.4, 0.3, -0.5])

    result = solve_ik_position_only(chain, target.position, [0.3, 0.4, -0.3])

    assert result.converged
    assert result.position_error < 1e-4


def test_solve_is_deterministic(chain7, q7):
    target, _ = compute_forward_kinematics(chain7, q7)
    seed = np.zeros(7) + 0.1

    a = solve_ik(chain7, target, seed)
    b = solve_ik(chain7, target, seed)

    assert a.status == b.status
    assert a.iterations == b.iterations
    assert a.final_error == b.final_error
    assert a.position_error == b.position_error
    assert a.orientation_error == b.orientation_error
    np.testing.assert_array_equal(a.joint_positions, b.joint_positions)


def test_seed_at_solution_converges_without_steps(chain7, q7):
    target, _ = compute_forward_kinematics(chain7, q7)
    result = solve_ik(chain7, target, q7)

    assert result.converged
    assert result.iterations == 0
    np.testing.assert_array_equal(result.joint_positions, q7)


@pytest.mark.parametrize("seed", [[0.3, -0.5], [0.0, 0.0], [1.0, 0.01]])
def test_fully_extended_target_terminates(planar_chain, seed):
    config = IKConfig(max_iterations=100)
    target = SE3Pose(position=[0.6, 0.0, 0.0], rotation=np.eye(3))

    result = solve_ik(planar_chain, target, seed, config)

    assert result.status in (
        IKStatus.SUCCESS,
        IKStatus.MAX_ITERATIONS,
        IKStatus.DIVERGENT,
    )
    assert result.iterations <= config.max_iterations
    assert np.all(np.isfinite(result.joint_positions))
    assert np.isfinite(result.final_error)


def test_out_of_reach_target_is_reported(planar_chain):
    target = SE3Pose(position=[0.8, 0.0, 0.0], rotation=np.eye(3))

    result = solve_ik(planar_chain, target, [0.3, -0.5])

    assert not result.converged
    assert result.status in (IKStatus.MAX_ITERATIONS, IKStatus.DIVERGENT)
    assert np.all(np.isfinite(result.joint_positions))
    with pytest.raises((UnreachableTargetError, ConvergenceFailureError)) as excinfo:
        result.raise_for_status()
    assert excinfo.value.result is result


def test_damping_saturation_is_divergent(planar_chain):
    # Extended straight at a target beyond reach: J^T e is exactly zero
    target = SE3Pose(position=[2.0, 0.0, 0.0], rotation=np.eye(3))

    result = solve_ik(planar_chain, target, [0.0, 0.0])

    assert result.status == IKStatus.DIVERGENT
    assert result.iterations == 1
    assert result.final_error == pytest.approx(1.4)
    with pytest.raises(UnreachableTargetError) as excinfo:
        result.raise_for_status()
    assert excinfo.value.result.final_error == pytest.approx(1.4)


def test_iteration_budget(chain7, q7):
    target, _ = compute_forward_kinematics(chain7, q7)

    result = solve_ik(chain7, target, q7 + 0.2, IKConfig(max_iterations=1))

    assert result.status == IKStatus.MAX_ITERATIONS
    assert result.iterations == 1
    with pytest.raises(ConvergenceFailureError):
        result.raise_for_status()


def test_should_stop_cancels(chain7, q7):
    target, _ = compute_forward_kinematics(chain7, q7)
    seed = np.zeros(7)

    result = solve_ik(chain7, target, seed, should_stop=lambda: True)

    assert result.status == IKStatus.CANCELLED
    assert result.iterations == 0
    np.testing.assert_array_equal(result.joint_positions, seed)
    with pytest.raises(ConvergenceFailureError):
        result.raise_for_status()


def test_bounds_respected_for_every_evaluation(chain7, q7, monkeypatch):
    evaluated = []
    original = ik_solver.compute_forward_kinematics

    def recording_fk(chain, q):
        evaluated.append(np.array(q, dtype=float))
        return original(chain, q)

    monkeypatch.setattr(ik_solver, "compute_forward_kinematics", recording_fk)

    bounds = [(-0.2, 0.2)] * 7
    # Seed partly outside the bounds, target needs angles outside them
    seed = JointConfiguration(values=np.full(7, 0.5), bounds=bounds)
    target, _ = original(chain7, q7)

    result = solve_ik(chain7, target, seed)

    assert evaluated
    for q in evaluated + [result.joint_positions]:
        assert np.all(q >= -0.2)
        assert np.all(q <= 0.2)


def test_bounds_ignored_without_use_limits(planar_chain):
    target = SE3Pose(position=[0.3, 0.3, 0.0], rotation=rpy_to_matrix(0, 0, np.pi / 2))
    seed = JointConfiguration(values=[0.3, 1.2], bounds=[(-0.1, 0.1), (-0.1, 0.1)])

    bounded = solve_ik(planar_chain, target, seed)
    free = solve_ik(planar_chain, target, seed, IKConfig(use_limits=False))

    assert not bounded.converged
    assert np.all(np.abs(bounded.joint_positions) <= 0.1)
    assert free.converged


def test_seed_length_mismatch(chain7):
    target = SE3Pose(position=[0.3, 0.0, 0.8], rotation=np.eye(3))
    with pytest.raises(InvalidConfigurationError):
        solve_ik(chain7, target, np.zeros(6))


def test_result_is_immutable(chain7, q7):
    target, _ = compute_forward_kinematics(chain7, q7)
    result = solve_ik(chain7, target, q7)

    assert not result.joint_positions.flags.writeable
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.iterations = 5
