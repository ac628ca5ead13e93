[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iodump"
version = "0.1.0"
description = "Wrap an I/O handle and log all activity in a readable format to a configurable destination."
requires-python = ">=3.10"
dependencies = []
keywords = ["io", "testing", "debugging", "dump", "replay"]
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
    "Topic :: Software Development :: Testing",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
iodump-timeshift = "iodump.timeshift:main"

[tool.hatch.build.targets.wheel]
packages = ["iodump"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
