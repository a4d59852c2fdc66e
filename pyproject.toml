[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pingtool"
version = "0.1.0"
description = "Send ICMP echo requests to a host and report round-trip statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["ping", "icmp", "network", "echo", "latency"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pingtool = "pingtool.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pingtool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
