[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tablesm"
version = "1.0.0"
description = "Table-driven, run-to-completion state machines with millisecond timers and a circular doubly linked list"
requires-python = ">=3.10"
dependencies = []
keywords = ["state machine", "run to completion", "linked list", "cooperative scheduling", "timers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tablesm-example = "tablesm.example:main"

[tool.hatch.build.targets.wheel]
packages = ["tablesm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
