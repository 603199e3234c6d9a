[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "planbench"
version = "0.1.0"
description = "Benchmark suite for 2-D motion planners: grid and polygon environments, search and sampling planners, path metrics and statistics."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "motion planning",
    "path planning",
    "benchmark",
    "a-star",
    "dijkstra",
    "theta-star",
    "prm",
    "rrt",
    "rrt-star",
    "robotics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
planbench = "planbench.benchmark:main"

[tool.hatch.build.targets.wheel]
packages = ["planbench"]

[tool.hatch.build.targets.sdist]
include = ["planbench", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
