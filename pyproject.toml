[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "protospec"
version = "0.1.0"
description = "Parser and configuration model for .proto schema files used by a protobuf code generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["protobuf", "proto", "parser", "code generation", "schema"]
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
    "Topic :: Software Development :: Code Generators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["protospec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
