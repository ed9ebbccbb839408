[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brick"
version = "0.1.0"
description = "Small building blocks for services: thread-safe sets, list and mapping helpers, field extraction, tracing, stack capture, JSON helpers and message-queue retry and trace utilities."
requires-python = ">=3.10"
dependencies = []
keywords = ["utilities", "sets", "tracing", "stacktrace", "json", "spinlock", "retry", "message-queue"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["brick"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
