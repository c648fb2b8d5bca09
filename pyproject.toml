[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raidfive"
version = "0.1.0"
description = "A RAID 5 block controller with rotating parity over plain files"
requires-python = ">=3.10"
dependencies = []
keywords = ["raid", "raid5", "parity", "storage", "block-device"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["raidfive"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
