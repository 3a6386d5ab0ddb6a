"""Build script for arm_kinematics.

Pure Python; the package tree uses implicit namespace subpackages, so
packages are collected with find_namespace_packages.
"""

from setuptools import find_namespace_packages, setup

setup(
    name="arm-kinematics",
    version="0.1.0",
    description="DH forward/inverse kinematics for 2-7 DOF serial arms",
    packages=find_namespace_packages(include=["arm_kinematics", "arm_kinematics.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "scipy",
        "flask",
        "fire",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "arm-ik=arm_kinematics.scripts.solve_ik:cli",
        ],
    },
)
