[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eipscan"
version = "0.1.0"
description = "Encoding and decoding of CIP messages and objects for EtherNet/IP scanners"
requires-python = ">=3.10"
dependencies = []
keywords = ["ethernet-ip", "cip", "industrial", "plc", "fieldbus"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["eipscan"]

[tool.pytest.ini_options]
addopts = "-ra"
