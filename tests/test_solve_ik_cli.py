import json
import math

from arm_kinematics.scripts.solve_ik import main


def test_cli_prints_solution(capsys):
    main(x=0.0, y=0.2, z=0.3 + math.sqrt(0.05), dof=2)

    data = json.loads(capsys.readouterr().out)
    assert data["converged"] is True
    assert len(data["jointAngles"]) == 2


def test_cli_prints_error(capsys):
    main(x=0.9, y=0.0, z=0.5, dof=3, policy="reject")

    data = json.loads(capsys.readouterr().out)
    assert data["error"] == "UNREACHABLE_TARGET"


def test_cli_iteration_budget(capsys):
    main(x=0.0, y=0.2, z=0.3 + math.sqrt(0.05), dof=2, max_iterations=1)

    data = json.loads(capsys.readouterr().out)
    assert data["error"] == "CONVERGENCE_FAILURE"
    assert data["iterations"] == 1
