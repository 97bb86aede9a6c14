[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "esynth"
version = "0.1.0"
description = "Support library for fragment-based molecule synthesis: Bloom filters, edge bookkeeping, zlib file compression, option parsing and batch runs"
requires-python = ">=3.10"
dependencies = []
keywords = ["chemistry", "molecule synthesis", "bloom filter", "fragments", "zlib"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
esynth-zpipe = "esynth.zpipe:main"
esynth-batch = "esynth.batch:main"

[tool.hatch.build.targets.wheel]
packages = ["esynth"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
