#!/usr/bin/env python
"""
Setup script for WorkforceManager
"""

from pathlib import Path

from setuptools import find_namespace_packages, setup

ROOT = Path(__file__).parent


def read_requirements(name: str) -> list[str]:
    """Read requirement lines, skipping comments and includes"""
    lines = (ROOT / name).read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith(("#", "-r"))]


setup(
    name="workforce-manager",
    version="1.0.0",
    description="Leave balances, leave requests and worker availability API",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["backend", "backend.*", "shared", "shared.*"]),
    py_modules=["run"],
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "test": read_requirements("requirements-dev.txt"),
    },
    entry_points={
        "console_scripts": [
            "workforce-manager=run:main",
        ],
    },
)
