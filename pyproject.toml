[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bucketbrowse"
version = "0.1.0"
description = "Browse the contents of an object bucket as an expandable HTML directory tree over WSGI"
requires-python = ">=3.10"
dependencies = []
keywords = ["bucket", "object storage", "file browser", "wsgi", "directory listing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bucketbrowse = "bucketbrowse.server:main"

[tool.hatch.build.targets.wheel]
packages = ["bucketbrowse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
