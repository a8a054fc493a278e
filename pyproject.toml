[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lifekiller"
version = "0.1.0"
description = "Evolve small neural networks that play Conway's Game of Life against nature, with a trainer, a network dump tool and an interactive client."
requires-python = ">=3.10"
keywords = ["game-of-life", "cellular-automata", "neuroevolution", "genetic-algorithm", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "msgpack",
    "termcolor",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lifekiller = "lifekiller.app:main"
lifekiller-train = "lifekiller.train:main"
lifekiller-netdump = "lifekiller.netdump:main"

[tool.hatch.build.targets.wheel]
packages = ["lifekiller"]

[tool.pytest.ini_options]
addopts = "-ra"
