[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xvutils"
version = "0.1.0"
description = "Small Unix-style utilities, a shell command parser, a free-list allocator and RISC-V, virtio and ELF layout helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "unix",
    "utilities",
    "grep",
    "shell",
    "parser",
    "malloc",
    "elf",
    "virtio",
    "risc-v",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xv-grep = "xvutils.grep:main"
xv-files = "xvutils.fileutils:main"
xv-tools = "xvutils.tools:main"
xv-ps = "xvutils.ps:main"

[tool.hatch.build.targets.wheel]
packages = ["xvutils"]

[tool.hatch.build.targets.sdist]
include = ["xvutils", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
