[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syskit"
version = "0.1.0"
description = "Small systems-programming toolkit: thread pools, a reactor-style TCP server, blocking servers, disk and file utilities, JSON patching, logging setup and ZeroMQ request/reply and socket monitoring."
requires-python = ">=3.10"
dependencies = [
    "pyzmq",
]
keywords = [
    "reactor",
    "selectors",
    "thread-pool",
    "tcp",
    "zeromq",
    "json-patch",
    "json-pointer",
    "disk-usage",
    "logging",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
syskit-threadpool = "syskit.threadpool:main"
syskit-diskusage = "syskit.diskusage:main"
syskit-filetree = "syskit.filetree:main"
syskit-variadic = "syskit.variadic:main"
syskit-inputwatch = "syskit.inputwatch:main"
syskit-swapcase-server = "syskit.swapcase_server:main"
syskit-blocking-server = "syskit.blocking_servers:main"
syskit-echo-client = "syskit.echo_client:main"
syskit-logdemo = "syskit.logsetup:main"
syskit-hello = "syskit.hello:main"
syskit-monitor = "syskit.monitor:main"

[tool.hatch.build.targets.wheel]
packages = ["syskit"]

[tool.hatch.build.targets.sdist]
include = [
    "syskit",
    "tests",
    "pyproject.toml",
    "README.md",
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
