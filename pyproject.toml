[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nsbench"
version = "0.1.0"
description = "Namespace path-resolution benchmarking toolkit: dataset generation, resolvers, workloads, memory sampling and result writers"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "filesystem", "namespace", "path resolution", "metadata"]
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
    "Topic :: System :: Benchmark",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nsbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
