[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "microsignal"
version = "0.1.0"
description = "Fixed-point audio front-end primitives: filter banks, spectral subtraction, PCAN gain control, windowing and ring buffers."
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "dsp", "fixed-point", "filterbank", "mel", "pcan", "signal-processing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["microsignal"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
