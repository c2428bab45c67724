[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskheight"
version = "0.1.0"
description = "Decode standing desk controller serial traffic into desk height readings"
requires-python = ">=3.10"
dependencies = []
keywords = ["standing desk", "uart", "serial", "home automation", "sensor", "jarvis", "uplift", "omnidesk", "pokar"]
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
    "Topic :: Home Automation",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["deskheight"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
