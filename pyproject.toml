[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iftkit"
version = "0.1.0"
description = "Incremental font transfer helpers: table keyed patches, patch URL templates and IFTB config conversion"
requires-python = ">=3.10"
keywords = ["fonts", "ift", "incremental font transfer", "brotli", "patch", "opentype", "uri template"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Fonts",
]
dependencies = [
    "brotli",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
iftb2config = "iftkit.iftb2config:main"

[tool.hatch.build.targets.wheel]
packages = ["iftkit"]

[tool.pytest.ini_options]
addopts = "-ra"
