[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mapxml"
version = "0.1.0"
description = "Decode XML documents into nested dictionaries and encode dictionaries back to XML"
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "dict", "map", "decode", "encode", "serialization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mapxml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
