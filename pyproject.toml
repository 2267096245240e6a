[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "livemonitor"
version = "0.4.0"
description = "Live plotting of numeric data streamed over TCP as line graphs and heatmaps"
requires-python = ">=3.10"
keywords = ["plotting", "monitoring", "tcp", "live data", "heatmap", "matplotlib"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
livemonitor = "livemonitor.app:main"

[tool.hatch.build.targets.wheel]
packages = ["livemonitor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
