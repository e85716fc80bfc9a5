[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dagfx"
version = "0.1.0"
description = "Graphics-side data formats and packet builders for a console action RPG engine: matrices, GIF tags, fonts, display lists, GS DMA programs and disc directories"
requires-python = ">=3.10"
dependencies = []
keywords = ["gs", "gif", "dma", "display-list", "font", "iso9660", "game-engine"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dagfx"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
