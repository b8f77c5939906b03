[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "surveykit"
version = "0.1.0"
description = "Interactive terminal prompts: text input, confirmations, multi-line text, editors, passwords and multi-selects"
requires-python = ">=3.10"
dependencies = []
keywords = ["prompt", "terminal", "cli", "interactive", "questions", "multiselect"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["surveykit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
