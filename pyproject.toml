[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adbwire"
version = "2.1.14"
description = "Android Debug Bridge wire protocol: messages, sync transfers and device commands over any message transport"
requires-python = ">=3.10"
keywords = ["adb", "android", "debug bridge", "protocol", "sync"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["adbwire"]

[tool.pytest.ini_options]
addopts = "-ra"
