[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pngcore"
version = "1.0.0"
description = "Simple PNG chunk parsing and writing, plus concurrent assembly of an image from fetched strips"
requires-python = ">=3.10"
dependencies = []
keywords = ["png", "image", "chunk", "crc", "zlib", "producer-consumer"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pngcore-paster2 = "pngcore.paster2:main"
pngcore-simple-read = "pngcore.simple_read:main"

[tool.hatch.build.targets.wheel]
packages = ["pngcore"]

[tool.pytest.ini_options]
addopts = "-ra"
