[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bftbench"
version = "0.1.0"
description = "Client-side building blocks for a replicated BFT benchmark: YCSB workload generation, in-flight tracking and run statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "bft", "pbft", "ycsb", "zipf", "statistics", "consensus"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bftbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
