[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gaugekit"
version = "0.1.0"
description = "Instrument gauges, meters and progress bars rendered to images"
requires-python = ">=3.10"
keywords = ["gauge", "meter", "dashboard", "progress bar", "instrumentation", "rendering"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gaugekit"]

[tool.pytest.ini_options]
addopts = "-ra"
