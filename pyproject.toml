[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "esindexer"
version = "0.1.0"
description = "Index templates, query bodies, work items and transaction helpers for indexing blockchain data into Elasticsearch"
requires-python = ">=3.10"
dependencies = []
keywords = ["elasticsearch", "indexer", "blockchain", "templates", "opendistro"]
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
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["esindexer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
