[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lsdtools"
version = "0.1.0"
description = "Hash tables, linked lists and compact hostlist/hostset handling for cluster host names"
requires-python = ">=3.10"
dependencies = []
keywords = ["hostlist", "hostset", "hash table", "linked list", "cluster"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Clustering",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["lsdtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
