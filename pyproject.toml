[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdslice"
version = "0.1.0"
description = "Multidimensional array views with layout mappings and sub-view slicing"
requires-python = ">=3.10"
dependencies = []
keywords = ["mdspan", "multidimensional", "array", "view", "layout", "slicing", "strides"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mdslice-bench = "mdslice.bench:main"

[tool.hatch.build.targets.wheel]
packages = ["mdslice"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
