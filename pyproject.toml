[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mimiqsim"
version = "0.1.0"
description = "A small state-vector quantum circuit simulator with LaTeX reports and OpenQASM 2.0 output"
requires-python = ">=3.10"
dependencies = []
keywords = ["quantum", "simulator", "state-vector", "openqasm", "latex", "qcircuit"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mimiqsim = "mimiqsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mimiqsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
