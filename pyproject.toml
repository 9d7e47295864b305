[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pollwatch"
version = "1.19.0"
description = "File change monitor that detects changes by periodically statting watched paths"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "monitor", "watch", "poll", "file changes", "events"]
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
    "Topic :: System :: Filesystems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pollwatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
