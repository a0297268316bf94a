[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rns"
version = "0.1.0"
description = "HTTP/1.1 request parsing, response writing, routing and a worker thread pool"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "routing", "thread-pool", "web"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rns"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
