[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "whirlpool_cpi"
version = "0.1.4"
description = "Account layouts, instruction encoding and tick-array decoding for the Whirlpool program"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "solana",
    "anchor",
    "whirlpool",
    "borsh",
    "base58",
    "amm",
    "concentrated-liquidity",
]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["whirlpool_cpi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_unreachable = true
