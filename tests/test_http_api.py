import math

import pytest

from arm_kinematics.config.robot_config import DH_TEMPLATE
from arm_kinematics.core.kinematics_service import KinematicsService
from arm_kinematics.interfaces.http_api import KinematicsServer

REACHABLE_2DOF = {"x": 0.0, "y": 0.2, "z": 0.3 + math.sqrt(0.05)}


class ExplodingService(KinematicsService):
    def handle(self, payload):
        raise RuntimeError("boom")


@pytest.fixture
def client():
    return KinematicsServer().app.test_client()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == "OK"


def test_ik_success(client):
    response = client.post("/ik", json={"position": REACHABLE_2DOF, "dof": 2})

    assert response.status_code == 200
    data = response.get_json()
    assert data["converged"] is True
    assert len(data["jointAngles"]) == 2
    assert data["residualError"] < 1e-4
    assert data["iterations"] >= 1
    assert "computationTimeSeconds" in data


def test_ik_invalid_dof(client):
    response = client.post("/ik", json={"position": REACHABLE_2DOF, "dof": 12})

    assert response.status_code == 400
    assert response.get_json()["error"] == "INVALID_DOF"


def test_ik_invalid_pose(client):
    response = client.post("/ik", json={"position": {"x": 0.1, "y": 0.2}, "dof": 3})

    assert response.status_code == 400
    assert response.get_json()["error"] == "INVALID_POSE"


def test_ik_body_not_json(client):
    response = client.post("/ik", data="not json", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["error"] == "INVALID_POSE"


def test_ik_body_not_object(client):
    response = client.post("/ik", json=[1, 2, 3])
    assert response.status_code == 400


def test_ik_convergence_failure(client):
    response = client.post(
        "/ik", json={"position": REACHABLE_2DOF, "dof": 2, "maxIterations": 1}
    )

    assert response.status_code == 422
    data = response.get_json()
    assert data["error"] == "CONVERGENCE_FAILURE"
    assert data["iterations"] == 1


def test_ik_rejected_target():
    client = KinematicsServer(KinematicsService(workspace_policy="reject")).app.test_client()

    response = client.post(
        "/ik", json={"position": {"x": 0.9, "y": 0.0, "z": 0.5}, "dof": 3}
    )

    assert response.status_code == 422
    assert response.get_json()["error"] == "UNREACHABLE_TARGET"


def test_ik_internal_error():
    client = KinematicsServer(ExplodingService()).app.test_client()

    response = client.post("/ik", json={"position": REACHABLE_2DOF, "dof": 2})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal server error"}


def test_chain_description(client):
    response = client.get("/chain/7")

    assert response.status_code == 200
    data = response.get_json()
    assert data["dof"] == 7
    assert len(data["dhParameters"]) == 7
    first = data["dhParameters"][0]
    assert (first["thetaOffset"], first["d"], first["a"]) == DH_TEMPLATE[0][:3]
    assert first["alpha"] == pytest.approx(DH_TEMPLATE[0][3])
    assert data["workspace"] == {
        "x": {"min": -1.0, "max": 1.0},
        "y": {"min": -1.0, "max": 1.0},
        "z": {"min": 0.3, "max": 1.5},
    }


def test_chain_prefix(client):
    data = client.get("/chain/3").get_json()
    assert [row["a"] for row in data["dhParameters"]] == [0.0, 0.3, 0.3]


@pytest.mark.parametrize("dof", [1, 9])
def test_chain_invalid_dof(client, dof):
    response = client.get(f"/chain/{dof}")

    assert response.status_code == 400
    assert response.get_json()["error"] == "INVALID_DOF"
