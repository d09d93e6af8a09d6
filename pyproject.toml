[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rosserial"
version = "0.1.0"
description = "Client side of the rosserial protocol: message serialization, framing, a node handle and a TCP transport"
requires-python = ">=3.10"
dependencies = []
keywords = ["ros", "rosserial", "robotics", "serialization", "embedded", "framing"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rosserial"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
