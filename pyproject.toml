[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cogbump"
version = "0.1.0"
description = "Conventional commit checking, semantic version bumping and changelog rendering"
requires-python = ">=3.10"
keywords = ["conventional-commits", "semver", "changelog", "versioning", "jinja2"]
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
    "Topic :: Software Development :: Version Control :: Git",
]
dependencies = [
    "jinja2>=3.0",
    "semver>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cogbump"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
