[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slogrus"
version = "0.1.0"
description = "Leveled logging with fields, chained entries and line writers, emitted through key=value text or JSON handlers"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "structured-logging", "json", "key-value", "levels"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slogrus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
