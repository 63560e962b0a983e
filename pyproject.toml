[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aiosu"
version = "2.23.2"
description = "SD card update helpers for a homebrew console: firmware detection, controller colour profiles, downloads, cheat files and DeepSea package requests"
requires-python = ">=3.10"
keywords = ["homebrew", "updater", "cheats", "atmosphere", "deepsea", "joy-con", "mega"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
    "Topic :: Utilities",
]
dependencies = [
    "requests>=2.28",
    "cryptography>=41",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[project.scripts]
aiosu-forwarder = "aiosu.forwarder:main"

[tool.hatch.build.targets.wheel]
packages = ["aiosu"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
