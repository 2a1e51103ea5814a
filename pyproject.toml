[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "perfwatch"
version = "0.1.0"
description = "System performance monitoring models: CPU, memory, disk, network, GPU and process figures with short usage histories"
requires-python = ">=3.10"
keywords = ["monitoring", "performance", "cpu", "memory", "disk", "network", "gpu", "processes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["perfwatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
