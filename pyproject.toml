[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corewar"
version = "0.1.0"
description = "An assembler for Core War champions and a virtual machine that runs them against each other in a shared memory arena"
requires-python = ">=3.10"
dependencies = []
keywords = ["corewar", "assembler", "virtual-machine", "game", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
corewar-asm = "corewar.asm_cli:main"
corewar = "corewar.vm:main"

[tool.hatch.build.targets.wheel]
packages = ["corewar"]

[tool.pytest.ini_options]
addopts = "-ra"
