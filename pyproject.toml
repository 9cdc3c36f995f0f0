[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "naoqi_converters"
version = "0.1.0"
description = "Converters that turn robot memory, motion and sensor readings into stamped, message-shaped records"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "naoqi", "pepper", "nao", "sensors", "diagnostics", "odometry", "imu", "sonar", "camera"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["naoqi_converters"]

[tool.pytest.ini_options]
addopts = "-ra"
