[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tuihist"
version = "0.1.0"
description = "Terminal UI building blocks and shell-history tooling: styles, layout, cell buffers, fuzzy search and statistics"
requires-python = ">=3.10"
keywords = ["shell", "history", "terminal", "tui", "fuzzy-search", "layout"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Terminals",
]
dependencies = [
    "regex",
    "wcwidth",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tuihist"]

[tool.hatch.build.targets.sdist]
include = ["tuihist", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
