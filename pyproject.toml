[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "issueoperator"
version = "0.0.1"
description = "Issue resource types and a reconciler that keeps issue labels and state in sync"
requires-python = ">=3.10"
dependencies = []
keywords = ["issues", "reconciler", "operator", "labels", "custom-resource"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["issueoperator"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
