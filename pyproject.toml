[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "threadcraft"
version = "0.1.0"
description = "Thread-based concurrency building blocks: barriers, latches, semaphores, thread-safe containers, parallel algorithms and thread pools."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "concurrency",
    "threading",
    "thread pool",
    "barrier",
    "latch",
    "semaphore",
    "parallel algorithms",
    "work stealing",
    "prefix sum",
    "quicksort",
]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
threadcraft = "threadcraft.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["threadcraft"]

[tool.pytest.ini_options]
addopts = "-ra"
