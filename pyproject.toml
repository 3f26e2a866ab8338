[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cqsimbe"
version = "0.1.0"
description = "A simulated quantum backend with a threaded host/device execution model."
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["quantum", "simulator", "state-vector", "qft", "backend"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Quantum Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cqsimbe-qft = "cqsimbe.qft:main"

[tool.hatch.build.targets.wheel]
packages = ["cqsimbe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
