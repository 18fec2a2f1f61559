[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fancyknob"
version = "0.2.0"
description = "Circular knob widget model with linear and logarithmic value mapping."
requires-python = ">=3.10"
dependencies = []
keywords = ["ui", "widget", "knob", "range", "logarithmic"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Widget Sets",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fancyknob"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
