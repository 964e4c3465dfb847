[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "leafbridge"
version = "0.1.0"
description = "Deployment configuration model, validation and event formatting for software deployments."
requires-python = ">=3.11"
dependencies = []
keywords = ["deployment", "software-distribution", "msi", "installer", "configuration", "versions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["leafbridge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
