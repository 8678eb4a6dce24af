[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "marksweep"
version = "0.1.0"
description = "A small virtual machine heap with a mark-and-sweep garbage collector"
requires-python = ">=3.10"
dependencies = []
keywords = ["garbage collection", "mark and sweep", "virtual machine", "heap", "education"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
marksweep = "marksweep.cli:main"
marksweep-demo = "marksweep.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["marksweep"]

[tool.pytest.ini_options]
addopts = "-ra"
