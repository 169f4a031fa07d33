[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plasmc"
version = "0.1.0"
description = "Front end for the Plasm programming language: spans, line tables, diagnostics and a recursive-descent parser"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "parser", "ast", "diagnostics", "plasm"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["plasmc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
