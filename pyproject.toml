[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynmenu"
version = "5.3.0"
description = "A keyboard-driven menu engine with incremental matching, and a command that filters file lists by their properties"
requires-python = ">=3.10"
dependencies = []
keywords = ["menu", "launcher", "matching", "filter", "files", "window-manager"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers :: Applets",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stest = "dynmenu.stest:main"

[tool.hatch.build.targets.wheel]
packages = ["dynmenu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
