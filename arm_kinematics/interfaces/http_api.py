#!/usr/bin/env python
import logging
import threading

from flask import Flask, jsonify, request

from arm_kinematics.core.kinematics_service import KinematicsService
from arm_kinematics.errors import (
    ConvergenceFailureError,
    InvalidConfigurationError,
    InvalidPoseError,
    KinematicsError,
    UnreachableTargetError,
)
from arm_kinematics.kinematics import create_chain

logger = logging.getLogger("KinematicsServer")

HTTP_STATUS = {
    InvalidConfigurationError.code: 400,
    InvalidPoseError.code: 400,
    UnreachableTargetError.code: 422,
    ConvergenceFailureError.code: 422,
}


class KinematicsServer:
    def __init__(self, service: KinematicsService | None = None, host="0.0.0.0", port=11111):
        self.host = host
        self.port = port
        self.service = service if service is not None else KinematicsService()

        # Initialize Flask app
        self.app = Flask(__name__)
        self.setup_routes()

        logger.info("KinematicsServer initialized")

    def setup_routes(self):
        """Setup Flask routes for HTTP API"""

        @self.app.route("/ik", methods=["POST"])
        def inverse_kinematics():
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                return (
                    jsonify(
                        {
                            "error": InvalidPoseError.code,
                            "message": "Request body must be a JSON object",
                        }
                    ),
                    400,
                )

            try:
                response = self.service.handle(payload)
            except Exception as e:
                logger.error(f"Error in ik endpoint: {e}")
                return jsonify({"error": "Internal server error"}), 500

            if response.success:
                return jsonify(response.to_dict()), 200
            return jsonify(response.to_dict()), HTTP_STATUS.get(response.error, 400)

        @self.app.route("/chain/<int:dof>", methods=["GET"])
        def chain(dof: int):
            # DH table and workspace box for clients that draw the arm
            try:
                kinematic_chain = create_chain(dof)
            except KinematicsError as e:
                return jsonify({"error": e.code, "message": e.message}), 400

            workspace = self.service.workspace_ranges.get(dof)
            return jsonify(
                {
                    "dof": kinematic_chain.dof,
                    "dhParameters": [
                        {
                            "thetaOffset": j.theta_offset,
                            "d": j.d,
                            "a": j.a,
                            "alpha": j.alpha,
                        }
                        for j in kinematic_chain.joints
                    ],
                    "workspace": workspace.to_dict() if workspace else None,
                }
            )

        @self.app.route("/health", methods=["GET"])
        def health():
            return jsonify("OK"), 200

    def run(self):
        """Run the Flask app"""
        logger.info(f"Starting KinematicsServer Flask app on port {self.port}")
        self.app.run(host=self.host, port=self.port, debug=False, use_reloader=False)

    def run_threaded(self):
        """Run the Flask app in a separate thread"""
        t = threading.Thread(target=self.run, daemon=True)
        t.start()
        return t


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    KinematicsServer().run()
