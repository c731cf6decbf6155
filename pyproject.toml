[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fixkit"
version = "0.1.0"
description = "FIX protocol building blocks: typed field values, field maps, session time ranges, event timers and session logs."
requires-python = ">=3.10"
dependencies = []
keywords = ["fix", "financial-information-exchange", "trading", "protocol", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fixkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
