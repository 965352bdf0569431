[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "signum-explorer"
version = "1.9.0"
description = "Signum blockchain toolkit: node API client with failover, price feeds, mining calculator, plot crossing checker and database models"
requires-python = ">=3.10"
keywords = ["signum", "blockchain", "explorer", "mining", "cryptocurrency"]
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
    "Topic :: Communications :: Chat",
    "Typing :: Typed",
]
dependencies = [
    "requests>=2.25",
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.22",
]

[tool.hatch.build.targets.wheel]
packages = ["signum_explorer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
