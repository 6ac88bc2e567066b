[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gossipmax"
version = "0.1.0"
description = "In-process simulation of clients that farm out max-finding subtasks to possibly dishonest servers, vote on the results and gossip server scores."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulation",
    "discrete-event",
    "gossip",
    "majority-voting",
    "byzantine",
    "distributed-computing",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gossipmax = "gossipmax.simulation:main"

[tool.hatch.build.targets.wheel]
packages = ["gossipmax"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
