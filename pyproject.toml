[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "temporal_kg"
version = "0.1.0"
description = "Temporal knowledge graph toolkit: bitemporal graph types, Gremlin query building, an HTTP API skeleton and a client"
requires-python = ">=3.10"
keywords = [
    "knowledge-graph",
    "temporal",
    "bitemporal",
    "gremlin",
    "graph-database",
    "fastapi",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: FastAPI",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Typing :: Typed",
]
dependencies = [
    "fastapi",
    "pydantic",
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
    "httpx",
]

[project.scripts]
temporal-kg-client = "temporal_kg.client:main"

[tool.hatch.build.targets.wheel]
packages = ["temporal_kg"]

[tool.hatch.build.targets.sdist]
include = [
    "temporal_kg",
    "tests",
]

[tool.pytest.ini_options]
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
