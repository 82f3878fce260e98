[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "engbase"
version = "0.1.0"
description = "Foundation utilities for small engines: arenas, pools, string helpers, tables, vector math and a tetris game model."
requires-python = ">=3.10"
dependencies = []
keywords = ["arena", "allocator", "hash table", "vector math", "quaternion", "utf-8", "tetris"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["engbase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
