[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spacecadet"
version = "0.1.0"
description = "Building blocks for a pinball table engine: rectangle packing, text editing with undo, depth-buffered blitting, timers and score formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["pinball", "game", "rectangle-packing", "text-editing", "z-buffer", "timers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spacecadet"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
