[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ysstorage"
version = "0.4.0"
description = "Block devices, MBR partition tables and a read-only FAT16 filesystem for raw disk images, with small kernel-side helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["fat16", "mbr", "filesystem", "block-device", "disk-image", "partition"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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

[project.scripts]
ysstorage = "ysstorage.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ysstorage"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
