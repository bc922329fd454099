[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cfggen"
version = "0.1.0"
description = "Generate C++ config loader classes from XML config tables"
requires-python = ">=3.10"
dependencies = []
keywords = ["code generation", "xml", "config", "c++", "templates"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cfggen = "cfggen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cfggen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
