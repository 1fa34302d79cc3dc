[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softbuiltins"
version = "0.1.0"
description = "Software models of low-level runtime builtins: word-wise memory routines over an emulated memory and shift-and-add multiplication"
requires-python = ">=3.10"
dependencies = []
keywords = ["memcpy", "memmove", "memset", "memcmp", "strlen", "builtins", "soft-multiply"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["softbuiltins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
