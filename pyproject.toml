[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cosmonaute"
version = "0.1.0"
description = "Imports crate documentation sets generated by cargo rustdoc, stores them locally and searches them."
requires-python = ">=3.10"
dependencies = []
keywords = ["documentation", "rustdoc", "cargo", "docset"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Documentation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cosmonaute = "cosmonaute.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cosmonaute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
