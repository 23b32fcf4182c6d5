[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sparkhistory"
version = "0.0.1"
description = "Configuration, a circuit breaker, query parsing, analytics records and dashboard helpers for a read-only Spark history server"
requires-python = ">=3.11"
dependencies = []
keywords = ["spark", "history-server", "analytics", "monitoring", "circuit-breaker"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["sparkhistory"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
