[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "strided"
version = "0.1.0"
description = "Pure-Python strided n-dimensional tensors with pointwise math, reductions, sorting and random sampling"
requires-python = ">=3.10"
dependencies = []
keywords = ["tensor", "strided", "array", "numeric", "reduction", "sampling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["strided"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
