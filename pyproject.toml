[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "intsbridge"
version = "0.1.0"
description = "CDR message types, topic data types and an AddTwoInts WebSocket service for integration examples"
requires-python = ">=3.10"
keywords = ["cdr", "dds", "websocket", "add-two-ints", "serialization", "integration"]
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
    "Topic :: System :: Distributed Computing",
]
dependencies = [
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
intsbridge-websocket-add-two-ints = "intsbridge.websocket_server:main"

[tool.hatch.build.targets.wheel]
packages = ["intsbridge"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
