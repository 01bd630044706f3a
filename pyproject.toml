[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neogrid"
version = "0.1.0"
description = "Cursor animation, blink timing, font option parsing and crash reporting helpers for grid-based editor front ends"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "cursor", "animation", "easing", "guifont", "blink"]
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
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["neogrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
