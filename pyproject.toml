[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvasm"
version = "0.17.0"
description = "Encoder for RISC-V vector instructions that writes machine code into a code buffer"
requires-python = ">=3.10"
dependencies = []
keywords = ["risc-v", "assembler", "jit", "vector", "rvv", "machine-code"]
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
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rvasm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
