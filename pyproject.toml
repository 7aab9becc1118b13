[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gpfvm"
version = "0.1.0"
description = "Finite-volume solvers for special-relativistic and Newtonian hydrodynamics with WENO and Gaussian-process reconstruction"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "hydrodynamics",
    "relativistic",
    "finite-volume",
    "gaussian-process",
    "weno",
    "riemann-solver",
    "hll",
    "cfd",
]
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
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gpfvm = "gpfvm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gpfvm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
