[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bibliojson"
version = "0.1.0"
description = "Load and validate biblio-json packages of Bibles, dictionaries and cross references."
requires-python = ">=3.11"
dependencies = []
keywords = ["bible", "scripture", "cross-references", "dictionary", "jsonl", "toml", "osis"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Religion",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Religion",
    "Topic :: File Formats :: JSON",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bibliojson = "bibliojson.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bibliojson"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
