[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stashlog"
version = "0.1.0"
description = "Asynchronous double-buffered logging with console, file and rolling-file sinks and TCP backup of severe records"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "async", "double-buffer", "rolling-file", "backup", "thread-pool"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stashlog-backup-server = "stashlog.backup_server:main"
stashlog-demo = "stashlog.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["stashlog"]

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
