[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nosir"
version = "0.1.0"
description = "A small compiler for the Nos IR language that emits x86-64 NASM assembly"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "assembly", "x86-64", "nasm", "language"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nosir = "nosir.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["nosir"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
