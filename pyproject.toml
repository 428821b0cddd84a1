[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stardog"
version = "0.1.0"
description = "UDP game server, wire protocol and 24-bit BMP tools for a small multiplayer space shooter"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "server", "udp", "multiplayer", "bmp", "bitmap", "protocol"]
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
    "Topic :: Games/Entertainment :: Arcade",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stardog-server = "stardog.server:main"

[tool.hatch.build.targets.wheel]
packages = ["stardog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
