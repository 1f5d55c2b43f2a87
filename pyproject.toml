[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dsexplore"
version = "0.1.0"
description = "Design-space exploration of superscalar processor configurations by simulated annealing over simulator results"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "design space exploration",
    "simulated annealing",
    "computer architecture",
    "energy delay product",
    "cache",
    "simulation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dsexplore = "dsexplore.explorer:main"

[tool.hatch.build.targets.wheel]
packages = ["dsexplore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
