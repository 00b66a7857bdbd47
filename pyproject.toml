[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swechain"
version = "0.1.0"
description = "In-memory state modules for coding trajectories, issue auctions and bids, with JSON genesis, owner-checked messages and paginated queries"
requires-python = ">=3.10"
dependencies = []
keywords = ["state-machine", "auction", "bids", "genesis", "keeper", "pagination", "bech32"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["swechain"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
