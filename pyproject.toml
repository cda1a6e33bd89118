[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sourcekeeper"
version = "0.1.0"
description = "Source objects, artifacts and reconciliation helpers for Git repositories, buckets and Helm sources"
requires-python = ">=3.10"
dependencies = []
keywords = ["gitops", "artifacts", "reconciliation", "helm", "git", "bucket", "conditions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sourcekeeper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
