[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clinicbook"
version = "0.1.0"
description = "A small terminal appointment book for medical consultations, stored in a plain text file"
requires-python = ">=3.10"
dependencies = []
keywords = ["appointments", "consultations", "clinic", "scheduling", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
clinicbook = "clinicbook.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["clinicbook"]

[tool.pytest.ini_options]
addopts = "-ra"
