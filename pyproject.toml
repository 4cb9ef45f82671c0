[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qrzlog"
version = "0.1.1"
description = "Async client for the QRZ.com logbook API with ADIF encoding and parsing"
requires-python = ">=3.10"
keywords = ["ham-radio", "amateur-radio", "qrz", "logbook", "adif", "callsign"]
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
    "Framework :: AsyncIO",
    "Topic :: Communications :: Ham Radio",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "httpx>=0.24",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
    "respx>=0.20",
]

[project.scripts]
qrzlog = "qrzlog.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["qrzlog"]

[tool.hatch.build.targets.sdist]
include = ["qrzlog", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
