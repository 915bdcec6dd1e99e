[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tronkit"
version = "0.1.0"
description = "TRON addresses, ABI parameter encoding, account models, argument helpers and a small offline command line"
requires-python = ">=3.10"
keywords = ["tron", "trx", "blockchain", "abi", "base58", "trc10", "address"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "pycryptodome",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tronctl = "tronkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tronkit"]

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
warn_redundant_casts = true
