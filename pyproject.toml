[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picoradio"
version = "0.0.3"
description = "Band tables, station memory, configuration store and rotary encoder logic for an SI4735-based receiver"
requires-python = ">=3.10"
dependencies = []
keywords = ["radio", "si4735", "ham", "receiver", "ssb", "rotary-encoder"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Communications :: Ham Radio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["picoradio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
