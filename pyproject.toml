[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "epsraster"
version = "1.0.0"
description = "Raster line pipeline for inkjet printing: scaling, watermark blending, mirroring and page reversal"
requires-python = ">=3.10"
dependencies = []
keywords = ["printing", "raster", "inkjet", "watermark", "pipeline", "rle4", "bmp"]
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
    "Topic :: Printing",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["epsraster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
