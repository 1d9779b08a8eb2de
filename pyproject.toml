[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "velvetcloth"
version = "0.1.0"
description = "Position-based cloth simulation with a small actor/component scene framework"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["cloth", "simulation", "physics", "pbd", "position-based-dynamics", "spatial-hash"]
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
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
velvetcloth = "velvetcloth.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["velvetcloth"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
