[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matcomguard"
version = "0.1.0"
description = "Host guard that watches removable mounts, process resource use and open local TCP ports"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "monitoring",
    "security",
    "usb",
    "processes",
    "port-scanner",
    "integrity",
    "sha256",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
matcomguard = "matcomguard.app:main"
matcomguard-usb = "matcomguard.usb_monitor:main"
matcomguard-procs = "matcomguard.process_main:main"
matcomguard-ports = "matcomguard.port_scanner:main"

[tool.hatch.build.targets.wheel]
packages = ["matcomguard"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
